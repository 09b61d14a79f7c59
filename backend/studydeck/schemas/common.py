from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from studydeck.core.timeutils import ensure_utc

# SQLite отдаёт naive datetime, наружу всегда выдаём UTC
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]
