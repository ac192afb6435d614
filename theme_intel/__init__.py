"""Theme Intel — infer a site's design system from its public HTML/CSS."""

__version__ = "1.0.0"
