"""
Advanced configuration - retries, concurrency, progress
"""
import asyncio

from partupload import (
    ChunkedUploader,
    LinearBackoffStrategy,
    RetryConfig,
    TimeoutConfig,
    UploaderConfig,
    UploadError,
    is_retryable,
)


async def main():
    config = UploaderConfig(
        app_name="MyApp",
        max_concurrent_parts=4,
        timeout=TimeoutConfig(total=600, sock_read=120),
        retry=RetryConfig(max_retries=6, base_delay=1.0),
    )
    
    def on_progress(progress):
        print(f"Progress: {progress.percentage:.1f}% ({progress.uploaded_bytes} bytes)")
    
    # Give up on 4xx responses at once; retry network errors and 5xx
    uploader = ChunkedUploader(
        config=config,
        retry_strategy=LinearBackoffStrategy(config.retry, predicate=is_retryable),
        progress_callback=on_progress
    )
    
    try:
        result = await uploader.upload(
            "dsym.zip", "https://symbols.example.com/api", "builder", "secret"
        )
        print(f"Completed: {result}")
    except UploadError as e:
        print(f"Upload failed ({uploader.state.value}): {e}")


if __name__ == "__main__":
    asyncio.run(main())
