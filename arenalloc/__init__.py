"""Block-based arena allocator with alignment, temporary checkpoints and usage reporting."""

__version__ = "1.0.0"
__all__ = ["arena", "errors", "example"]