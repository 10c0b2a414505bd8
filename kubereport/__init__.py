"""KubeReport - Kubernetes cluster inventory reports (PDF and CSV)."""

__version__ = "0.2.0"
