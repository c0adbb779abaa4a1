"""DocuHero gateway core: configuration, user store, logging and resilience."""

__version__ = "2.0.0"
