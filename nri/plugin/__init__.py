"""Helpers for plugins, such as resolving scoped annotations."""