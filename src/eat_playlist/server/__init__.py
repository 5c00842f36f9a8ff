"""HTTP and WebSocket surface for hosted sessions."""
