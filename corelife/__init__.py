"""corelife – self-replicating programs competing in a circular core."""
