"""CLI channel implementations.

Importing this package triggers registration via @register_transport.
"""

import netgearctl.transports.ssh  # noqa: F401
import netgearctl.transports.telnet  # noqa: F401
