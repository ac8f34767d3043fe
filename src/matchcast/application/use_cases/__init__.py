from .resolution_pipeline import ResolutionPipeline

__all__ = ["ResolutionPipeline"]
