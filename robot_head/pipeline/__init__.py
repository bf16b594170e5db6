from .response import ResponsePipeline, call_collaborator

__all__ = ["ResponsePipeline", "call_collaborator"]
