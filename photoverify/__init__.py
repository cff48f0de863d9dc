"""Progress photo verification engine."""
