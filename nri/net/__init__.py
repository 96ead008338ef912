"""Socket pairs, pre-connected listeners and connection multiplexing."""