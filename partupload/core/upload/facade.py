"""
Upload facade.

Provides a simplified interface for chunked uploads.
Follows Facade Pattern - hides transport and session setup.
"""
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ..api.config import UploaderConfig
from .coordinator import ChunkedUploader
from .models import UploadProgress
from .services import AiohttpTransport


class UploadFacade:
    """
    Simplified interface for chunked uploads.
    
    Example:
        >>> from partupload import UploadFacade, UploaderConfig
        >>> facade = UploadFacade(UploaderConfig(base_url="https://symbols.example.com"))
        >>> result = await facade.upload("dsym.zip", "user", "secret", app_name="MyApp")
    """
    
    def __init__(self, config: Optional[UploaderConfig] = None):
        """
        Initialize upload facade.
        
        Args:
            config: Uploader configuration; ``base_url`` is used when
                ``upload`` gets none
        """
        self._config = config or UploaderConfig()
    
    @property
    def config(self) -> UploaderConfig:
        return self._config
    
    async def upload(
        self,
        file_path: Union[str, Path],
        username: str,
        password: str,
        app_name: Optional[str] = None,
        base_url: Optional[str] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> Any:
        """
        Upload a file.
        
        Args:
            file_path: Path to file to upload
            username: Basic auth user
            password: Basic auth password
            app_name: Optional bucket name (defaults to config.app_name)
            base_url: Optional endpoint root (defaults to config.base_url)
            progress_callback: Optional callback invoked after every part
            
        Returns:
            Server completion payload
            
        Raises:
            ValueError: If no base URL is configured
        """
        base_url = base_url or self._config.base_url
        if not base_url:
            raise ValueError("No base URL configured")
        
        async with AiohttpTransport(self._config) as transport:
            uploader = ChunkedUploader(
                transport=transport,
                config=self._config,
                progress_callback=progress_callback
            )
            return await uploader.upload(file_path, base_url, username, password, app_name)


async def upload_file(
    file_path: Union[str, Path],
    base_url: str,
    username: str,
    password: str,
    app_name: Optional[str] = None,
    config: Optional[UploaderConfig] = None
) -> Any:
    """Upload a file with a one-off uploader and return the completion payload."""
    return await UploadFacade(config).upload(
        file_path, username, password, app_name=app_name, base_url=base_url
    )
