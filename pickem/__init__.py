"""pickem - account and access-control API for a prediction-scoring app."""

__version__ = "0.1.0"
