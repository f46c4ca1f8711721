"""Core building blocks of the chunked upload client."""
