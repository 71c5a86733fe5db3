"""clawgate: composed config JSON Schema over HTTP and a gateway skills tool."""

from clawgate.config.settings import _project_version

__version__ = _project_version()
