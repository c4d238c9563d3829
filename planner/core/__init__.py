"""Pure calculation core, configuration, logging and the in-memory store."""
