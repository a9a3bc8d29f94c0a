"""Models module - lifecycle of the embedding and QA models."""

from esrs_extraction_pipeline.models.handle import ModelHandle, get_model_handle

__all__ = [
    "ModelHandle",
    "get_model_handle",
]
