"""Tests for logging helpers."""
import logging

import partupload
from partupload.core.logging import get_logger


class TestGetLogger:
    """Test suite for get_logger."""
    
    def test_returns_named_logger(self):
        """Test logger name is kept."""
        logger = get_logger('partupload.test')
        
        assert logger.name == 'partupload.test'
        assert logger.propagate is True
    
    def test_same_instance(self):
        """Test repeated calls return the same logger."""
        assert get_logger('partupload.test') is get_logger('partupload.test')

    def test_short_name_is_prefixed(self):
        """Test names outside the package namespace are prefixed."""
        assert get_logger('retry') is logging.getLogger('partupload.retry')
        assert get_logger('partupload').name == 'partupload'

    def test_package_null_handler(self):
        """Test the package logger carries exactly one NullHandler."""
        get_logger('upload')
        get_logger('upload.transport')

        handlers = logging.getLogger('partupload').handlers
        assert len([h for h in handlers if isinstance(h, logging.NullHandler)]) == 1

    def test_explicit_level_kept(self):
        """Test an explicitly set level is not reset."""
        logging.getLogger('partupload.level_test').setLevel(logging.DEBUG)

        assert get_logger('level_test').level == logging.DEBUG


class TestSetupLogging:
    """Test suite for setup_logging."""
    
    def test_sets_levels(self):
        """Test every package logger gets the level."""
        partupload.setup_logging(logging.DEBUG)
        
        try:
            for name in ('partupload', 'partupload.upload', 'partupload.retry'):
                assert logging.getLogger(name).level == logging.DEBUG
        finally:
            partupload.setup_logging(logging.WARNING)
    
    def test_part_log_line(self, caplog, make_file, make_uploader):
        """Test each acknowledged part is logged."""
        import asyncio
        partupload.setup_logging(logging.INFO)
        path = make_file(25)
        
        try:
            with caplog.at_level(logging.INFO, logger='partupload.upload'):
                asyncio.run(make_uploader(chunk_size=10).upload(
                    path, "https://uploads.example.com", "u", "p", "MyApp"
                ))
        finally:
            partupload.setup_logging(logging.WARNING)
        
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Uploaded part 1/3 (10 bytes)") for m in messages)
        assert any(m.startswith("Uploaded part 3/3 (5 bytes)") for m in messages)
