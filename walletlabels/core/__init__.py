"""Label model, codec and persistent store."""
