"""AWS Lambda handler for event logo colorization."""
import json
import logging
import os
import time
from dataclasses import asdict
from typing import Dict, Any

from botocore.exceptions import ClientError

from imaging.logo_fetcher import LogoFetcher
from processor.event_pipeline import EventPipeline
from processor.event_processor import EventProcessor
from storage.events_table import EventsTable

DEFAULT_LOGO_URL = 'https://assets.hackclub.com/icon-rounded.png'
DEFAULT_PHOTO_URL = '/default-event-photo.jpg'


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _error_response(message: str, error: Exception, start_time: float) -> Dict[str, Any]:
    duration = time.time() - start_time
    return {
        'statusCode': 500,
        'body': json.dumps({
            'message': message,
            'error': str(error),
            'error_type': type(error).__name__,
            'duration_seconds': round(duration, 2)
        })
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler: build the event lists used for rendering.

    Args:
        event: Invocation payload (unused)
        context: Lambda context object

    Returns:
        Response dict with statusCode and the upcoming, recent and
        colorized event lists
    """
    # Read configuration from environment variables
    table_name = os.environ.get('TABLE_NAME', 'events')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))
    default_logo_url = os.environ.get('DEFAULT_LOGO_URL', DEFAULT_LOGO_URL)
    default_photo_url = os.environ.get('DEFAULT_PHOTO_URL', DEFAULT_PHOTO_URL)

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Lambda execution started",
        extra={
            'table_name': table_name,
            'timeout_seconds': timeout_seconds
        }
    )

    try:
        pipeline = EventPipeline(
            events_table=EventsTable(table_name=table_name),
            processor=EventProcessor(default_photo=default_photo_url),
            logo_fetcher=LogoFetcher(
                default_logo_url=default_logo_url,
                timeout=timeout_seconds
            )
        )

        try:
            logger.info("Building event lists")
            lists = pipeline.build_event_lists()
        except ClientError as e:
            logger.error(
                f"Failed to list events from table: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response('Failed to list events', e, start_time)

        duration = time.time() - start_time
        statistics = {
            'events_fetched': lists.fetched,
            'upcoming': len(lists.upcoming),
            'colorized': len(lists.colorized),
            'recent': len(lists.recent),
            'skipped': len(lists.skipped),
            'duration_seconds': round(duration, 2)
        }

        logger.info(
            "Lambda execution completed successfully",
            extra=statistics
        )

        return {
            'statusCode': 200,
            'body': json.dumps({
                'message': 'Event lists built successfully',
                'statistics': statistics,
                'upcoming': [asdict(e) for e in lists.upcoming],
                'recent': [asdict(e) for e in lists.recent],
                'colorized': [asdict(e) for e in lists.colorized],
                'skipped': [
                    {
                        'name': result.event.name,
                        'reason': result.skip_reason.value,
                        'error': result.error
                    }
                    for result in lists.skipped
                ]
            }, default=str)
        }

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return _error_response('Event list build failed', e, start_time)
