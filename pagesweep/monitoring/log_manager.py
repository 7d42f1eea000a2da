import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

EVENTS_LOGGER = 'pagesweep.events'


def _reset_handlers(target: logging.Logger):
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()


class LogManager:
    """
    Logging setup for a crawl run

    Root logger gets a console handler plus a daily file for everything and
    one for warnings and errors. Run lifecycle events go to a separate
    JSON-lines file that does not propagate to the root logger.
    """

    def __init__(self, log_dir: str = "crawl_data/logs", log_level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.day = datetime.now().strftime('%Y%m%d')

        self.setup_logging(log_level)

    def _file_handler(self, prefix: str, level: int, formatter: logging.Formatter) -> logging.FileHandler:
        handler = logging.FileHandler(self.log_dir / f"{prefix}_{self.day}.log")
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler

    def setup_logging(self, log_level: str):
        """Replace root handlers with console, crawl log and error log handlers"""
        detailed_formatter = logging.Formatter(DETAILED_FORMAT)

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper()))
        _reset_handlers(root_logger)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
        root_logger.addHandler(console_handler)

        root_logger.addHandler(self._file_handler('crawler', logging.DEBUG, detailed_formatter))
        root_logger.addHandler(self._file_handler('errors', logging.WARNING, detailed_formatter))

        self.events_logger = logging.getLogger(EVENTS_LOGGER)
        _reset_handlers(self.events_logger)
        self.events_logger.setLevel(logging.INFO)
        self.events_logger.addHandler(self._file_handler('events', logging.INFO, logging.Formatter('%(message)s')))
        self.events_logger.propagate = False

    def log_crawl_event(self, event_type: str, **fields):
        """Append one JSON line describing a run lifecycle event"""
        event = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            **fields
        }
        self.events_logger.info(json.dumps(event, default=str))

    def export_metrics_json(self, metrics_data: Dict[str, Any], filename: Optional[str] = None) -> Path:
        """Write a metrics report into the log directory"""
        if filename is None:
            filename = f"metrics_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

        export_path = self.log_dir / filename
        with open(export_path, 'w') as f:
            json.dump(metrics_data, f, indent=2, default=str)

        logging.getLogger(__name__).info(f"Metrics exported to {export_path}")
        return export_path
