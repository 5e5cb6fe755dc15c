from __future__ import annotations
import sys

from .core.models import ConfigurationError
from .logging import setup_logging
from .services.run_service import PrimeCountService
from .settings import load_settings


def main() -> int:
    try:
        s = load_settings()
        config = s.run_config().validate()
    except ConfigurationError as e:
        setup_logging().error("invalid_configuration", reason=str(e))
        return 2
    setup_logging(s.log_level)
    PrimeCountService().count(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
