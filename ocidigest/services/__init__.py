"""Service implementations for ocidigest."""
