"""Working gRPC servers and clients for the unary, server-streaming, client-streaming and bidirectional patterns."""

__version__ = "0.1.0"
__all__ = ["messages", "unary", "server_stream", "client_stream", "bidi_stream", "cli"]