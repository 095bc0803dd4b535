"""Runtime of the Monkey language: objects, environments, evaluation, macros and sessions."""
