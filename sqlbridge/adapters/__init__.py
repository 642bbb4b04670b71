"""Adapters bridging the ORM connection contract to host database objects."""
