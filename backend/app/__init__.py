"""Ambient layer of the RIS citation engine: configuration, storage, schemas."""
