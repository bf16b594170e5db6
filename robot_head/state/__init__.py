from .runtime import RuntimeDeps
from .settings import AppSettings, SampleFormat, ClientSettings, PipelineSettings

__all__ = ["AppSettings", "ClientSettings", "PipelineSettings", "RuntimeDeps", "SampleFormat"]
