"""SOLIDify — flags likely SOLID violations in C# source and explains them."""

__version__ = "1.0.0"
