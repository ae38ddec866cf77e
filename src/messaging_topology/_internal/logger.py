"""The single logger used by every module of the package.

The library never attaches handlers; applications decide where records go.
"""

import logging

logger = logging.getLogger('messaging-topology')
