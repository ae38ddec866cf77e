"""The configuration classes in this module tune how topologies and forms are presented.

Many of these values should come from config files, environment variables, or command-line arguments of the hosting UI.

The configuration classes rely on Pydantic validation, so invalid values are rejected when the object is created,
before any diagram is rendered.
"""

from .shared import DiagramConfig, DiagramOrientation, FormConfig
from .viewer import TopologyViewerConfig
