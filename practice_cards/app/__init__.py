import sys
from pathlib import Path
from typing import Optional

import loguru

from practice_cards.service.config_manager import ConfigManager
from practice_cards.service_factory import ServiceFactory, ServiceFactoryConfig

config_manager = ConfigManager()

settings_ = config_manager.read_settings()
loguru.logger.remove()
loguru.logger.add(
    sys.stderr,
    level=settings_.logger_level,
)


def get_service_factory(
    root_dir: Optional[Path] = None,
    practice_dir: Optional[Path] = None,
    data_file: Optional[Path] = None,
) -> ServiceFactory:
    settings = config_manager.read_settings()

    service_factory = ServiceFactory(
        ServiceFactoryConfig(
            root_dir=root_dir or settings.root_dir,
            practice_dir=practice_dir or settings.practice_dir,
            data_file=data_file or settings.data_file,
            global_name=settings.global_name,
            category=settings.category,
            default_code_language=settings.default_code_language,
        )
    )
    return service_factory
