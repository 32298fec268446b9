"""Sample consumers that exercise the railyard core."""
