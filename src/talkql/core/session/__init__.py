"""Query session core: connection resolution, query turns and disconnect.

Re-exports the public symbols so callers can write
``from talkql.core.session import QuerySessionController``.
"""

from .client import QueryServiceClient  # noqa: F401
from .controller import QuerySessionController  # noqa: F401
from .disconnect import DisconnectCoordinator  # noqa: F401
from .exceptions import *  # noqa: F401, F403
from .formatter import format_response, format_table_names  # noqa: F401
from .models import *  # noqa: F401, F403
from .navigation import NavigationPort, RecordingNavigator  # noqa: F401
from .resolver import ConnectionResolver  # noqa: F401
