import typing as t
from datetime import datetime

import pytest
from freezegun import freeze_time
from freezegun.api import FrozenDateTimeFactory


@pytest.fixture(autouse=True)
def frozen(now: datetime) -> t.Iterator[FrozenDateTimeFactory]:
    """API requests read the real clock; pin it to the `now` fixture."""
    with freeze_time(now) as frozen_time:
        yield frozen_time
