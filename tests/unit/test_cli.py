"""Tests for the command line interface."""
from unittest.mock import AsyncMock, Mock, patch

from typer.testing import CliRunner

from partupload.cli.main import app
from partupload.core.exceptions import ExhaustedRetriesError

runner = CliRunner()


def patched_uploader(result=None, error=None):
    """Patch the CLI's uploader class with an AsyncMock upload."""
    instance = Mock()
    instance.upload = AsyncMock(return_value=result, side_effect=error)
    cls = Mock(return_value=instance)
    return patch('partupload.cli.main.ChunkedUploader', cls), cls, instance


class TestUploadCommand:
    """Test suite for 'partupload upload'."""
    
    def test_upload_prints_result(self, make_file):
        """Test successful upload prints the completion payload."""
        path = make_file(5)
        patcher, cls, instance = patched_uploader(result={'status': 'ok', 'id': 'abc'})
        
        with patcher:
            result = runner.invoke(app, [
                "upload", str(path),
                "--endpoint", "https://symbols.example.com",
                "--username", "user",
                "--password", "secret",
                "--app-name", "MyApp",
            ])
        
        assert result.exit_code == 0, result.output
        assert '"abc"' in result.output
        args = instance.upload.await_args.args
        assert args[1:] == ("https://symbols.example.com", "user", "secret", "MyApp")
    
    def test_env_configuration(self, make_file):
        """Test endpoint and credentials come from the environment."""
        path = make_file(5)
        patcher, cls, instance = patched_uploader(result={'status': 'ok'})
        
        with patcher:
            result = runner.invoke(app, ["upload", str(path)], env={
                'PARTUPLOAD_ENDPOINT': "https://env.example.com",
                'PARTUPLOAD_USERNAME': "env-user",
                'PARTUPLOAD_PASSWORD': "env-pass",
                'PARTUPLOAD_APP_NAME': "EnvApp",
            })
        
        assert result.exit_code == 0, result.output
        args = instance.upload.await_args.args
        assert args[1:] == ("https://env.example.com", "env-user", "env-pass", "EnvApp")
    
    def test_concurrency_option(self, make_file):
        """Test concurrency reaches the uploader config."""
        path = make_file(5)
        patcher, cls, instance = patched_uploader(result=None)
        
        with patcher:
            result = runner.invoke(app, [
                "upload", str(path),
                "-e", "https://symbols.example.com", "-u", "user", "-p", "secret",
                "--concurrency", "3", "--max-retries", "2",
            ])
        
        assert result.exit_code == 0, result.output
        config = cls.call_args.kwargs['config']
        assert config.max_concurrent_parts == 3
        assert config.retry.max_retries == 2
        assert config.retry.transient_only is False

    def test_transient_only_option(self, make_file):
        """Test --transient-only reaches the retry config."""
        path = make_file(5)
        patcher, cls, instance = patched_uploader(result=None)

        with patcher:
            result = runner.invoke(app, [
                "upload", str(path),
                "-e", "https://symbols.example.com", "-u", "user", "-p", "secret",
                "--transient-only",
            ])

        assert result.exit_code == 0, result.output
        assert cls.call_args.kwargs['config'].retry.transient_only is True

    def test_upload_failure_exit_code(self, make_file):
        """Test failures exit with code 1."""
        path = make_file(5)
        patcher, cls, instance = patched_uploader(
            error=ExhaustedRetriesError("Part 1 failed after 5 attempts", part_number=1, attempts=5)
        )
        
        with patcher:
            result = runner.invoke(app, [
                "upload", str(path),
                "-e", "https://symbols.example.com", "-u", "user", "-p", "secret",
            ])
        
        assert result.exit_code == 1
        assert "Upload failed" in result.output
    
    def test_empty_file_rejected(self, make_file):
        """Test empty file fails without contacting the server."""
        path = make_file(content=b"")
        
        result = runner.invoke(app, [
            "upload", str(path),
            "-e", "http://127.0.0.1:9", "-u", "user", "-p", "secret",
        ])
        
        assert result.exit_code == 1
        assert "empty" in result.output
    
    def test_missing_file(self, tmp_path):
        """Test non-existent path is a usage error."""
        result = runner.invoke(app, [
            "upload", str(tmp_path / "missing.zip"),
            "-e", "https://symbols.example.com", "-u", "user", "-p", "secret",
        ])
        
        assert result.exit_code != 0
    
    def test_file_kept_after_upload(self, make_file):
        """Test the CLI leaves the input file in place."""
        path = make_file(5)
        patcher, cls, instance = patched_uploader(result={'status': 'ok'})
        
        with patcher:
            runner.invoke(app, [
                "upload", str(path),
                "-e", "https://symbols.example.com", "-u", "user", "-p", "secret",
            ])
        
        assert path.exists()
