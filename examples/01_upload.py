"""
Upload an archive in 10 MiB parts
"""
import asyncio
import logging

from partupload import ChunkedUploader, setup_logging


async def main():
    logging.basicConfig(level=logging.INFO)
    setup_logging(logging.INFO)
    
    uploader = ChunkedUploader()
    result = await uploader.upload(
        "dsym.zip",
        "https://symbols.example.com/api",
        "builder",
        "secret",
        app_name="MyApp"
    )
    print(f"Completed: {result}")


if __name__ == "__main__":
    asyncio.run(main())
