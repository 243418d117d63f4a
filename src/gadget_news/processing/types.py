from __future__ import annotations

import datetime
from typing import Any, Callable, Sequence

from gadget_news.models import GadgetData

LogFunc = Callable[[str], None]
NowFunc = Callable[[], datetime.datetime]
GenerateTextFunc = Callable[[str], str | None]
FeedFetchFunc = Callable[[str], Sequence[Any]]
ExportFunc = Callable[[GadgetData], Any]
