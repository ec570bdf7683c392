"""Visit Insights analytics plugins: dashboard sparklines and visit dimensions."""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
