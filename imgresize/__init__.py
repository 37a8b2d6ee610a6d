"""Edge image resizer — resize and recompress S3 images per request."""

__version__ = "1.0.0"
