"""Settings for Maison.

Split into topical modules; every value is read from the environment via python-decouple.
"""

from .base import *  # noqa: F403
from .celery import *  # noqa: F403
from .ninja import *  # noqa: F403
from .observability import *  # noqa: F403
from .participants import *  # noqa: F403
from .unfold import *  # noqa: F403
