from .environment_variable import SiteEnvironmentVariable
from .site_configuration import SiteConfiguration

__all__ = ["SiteConfiguration", "SiteEnvironmentVariable"]
