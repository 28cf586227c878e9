from blob_commit.api.v1 import commits

__all__ = ["commits"]
