"""Public API facade."""

from rmf_site_gen.api.facade import SiteGen

__all__ = ["SiteGen"]
