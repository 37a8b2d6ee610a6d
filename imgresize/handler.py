"""
AWS Lambda@Edge handler — Image Resize

Attached to the CloudFront origin-request trigger of the image distribution.

Flow:
  1. Reads w (width), h (height) and q (quality) from the query string.
  2. No parameters: returns the request unchanged so CloudFront fetches the
     original from S3.
  3. Otherwise downloads the original from S3, checks its format against the
     URI extension, resizes it to fit inside w x h (never enlarging) and
     re-encodes it in the same format.
  4. Returns the image base64-encoded with a 30-day immutable cache-control,
     or a plain-text error response (400 / 404 / 413 / 500).

The S3 client is created once per container at import time and reused by
every invocation.
"""
from __future__ import annotations

import logging

from imgresize.config import get_settings
from imgresize.resizer import ImageResizer
from imgresize.s3 import S3ImageStore

settings = get_settings()

logger = logging.getLogger()
logger.setLevel(settings.log_level)
logging.getLogger("botocore").setLevel(logging.WARNING)

resizer = ImageResizer(S3ImageStore.from_settings(settings), settings)


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — CloudFront request event in, request or response out."""
    request = event["Records"][0]["cf"]["request"]
    return resizer.handle(request)
