"""Container data model, events, adjustments, updates, validation and ownership tracking."""