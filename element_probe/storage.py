# storage.py
import boto3

from .constants import logger, SCREENSHOT_PREFIX
from .utils import timestamped_name


def upload_screenshot(path: str, bucket: str, region: str, prefix: str = SCREENSHOT_PREFIX) -> str:
    key = f"screenshots/{timestamped_name(prefix, 'png')}"
    client = boto3.client("s3", region_name=region)
    with open(path, 'rb') as f:
        client.put_object(Bucket=bucket, Key=key, Body=f.read(), ContentType='image/png')
    url = f"https://{bucket}.s3.amazonaws.com/{key}"
    logger.info(f"Uploaded screenshot to {url}")
    return url
