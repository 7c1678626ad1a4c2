"""
Logging setup tests.
"""
from loguru import logger

from vmkit.core.logging import setup_logging


class TestSetupLogging:

    def test_file_sink_written(self, tmp_path):
        log_dir = tmp_path / "logs"
        handler_ids = setup_logging(debug_mode=True, log_dir=str(log_dir))
        try:
            logger.debug("written to file")
        finally:
            for handler_id in handler_ids:
                logger.remove(handler_id)

        assert len(handler_ids) == 2
        files = list(log_dir.glob("vmkit_*.log"))
        assert len(files) == 1
        assert "written to file" in files[0].read_text(encoding="utf-8")

    def test_console_only(self, tmp_path):
        handler_ids = setup_logging(debug_mode=False, log_dir=None)
        for handler_id in handler_ids:
            logger.remove(handler_id)

        assert len(handler_ids) == 1
