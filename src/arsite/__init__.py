"""arsite - validated access to the Strapi content backend of the AR Automation site."""

__version__ = "0.1.0"
