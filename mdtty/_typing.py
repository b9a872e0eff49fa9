# Yuio project, MIT license.
#
# https://github.com/taminomara/yuio/
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

# pyright: reportDeprecated=false
# ruff: noqa: F403, F405, I002

import re as _re
from typing import *  # type: ignore

from typing_extensions import *  # type: ignore

if TYPE_CHECKING:
    StrRePattern: TypeAlias = _re.Pattern[str]
else:
    StrRePattern = _re.Pattern[str]

# Note: dataclass doesn't always recognize class vars
# if they're re-exported from typing.
# See https://github.com/python/cpython/issues/133956.
del ClassVar  # noqa: F821
