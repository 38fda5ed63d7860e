"""Runtime helpers shared by commands: env, clock, logging, serialization."""
