"""AWS Lambda handlers for the Meetup events digest."""
import json
import logging
import time
from typing import Dict, Any

from config import Config
from exceptions import AuthenticationError, ConfigurationError, ValidationError
from notifier.discord_notifier import DiscordNotifier
from processor.digest_builder import DigestBuilder, INTRO_TEXT
from processor.registration import RegistrationHandler
from scraper.meetup_events import MeetupEventsFetcher
from storage.registry_store import RegistryStore


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    RESERVED_ATTRS = frozenset(
        logging.LogRecord('', 0, '', 0, '', (), None).__dict__
    ) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including any ``extra`` fields."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in record.__dict__.items():
            if key not in self.RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


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


def _response(status_code: int, body: str) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'body': body
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Scheduled handler that posts this month's Meetup events to Discord.

    Any failure while fetching or delivering is logged and re-raised so the
    invocation is marked as failed.

    Args:
        event: EventBridge event payload
        context: Lambda context object

    Returns:
        Response dict with statusCode and run statistics
    """
    config = Config.from_env()

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Digest run started",
        extra={
            'table_name': config.table_name,
            'event_page_size': config.event_page_size,
            'timeout_seconds': config.timeout_seconds
        }
    )

    try:
        missing = [
            name for name, value in (
                ('DISCORD_API_TOKEN', config.discord_api_token),
                ('DISCORD_CHANNEL', config.discord_channel)
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}"
            )

        store = RegistryStore(table_name=config.table_name)
        fetcher = MeetupEventsFetcher(timeout=config.timeout_seconds)
        builder = DigestBuilder()
        notifier = DiscordNotifier(
            token=config.discord_api_token,
            channel=config.discord_channel,
            timeout=config.timeout_seconds
        )

        groups = store.get_tracked_groups()
        if not groups:
            logger.info("No groups are tracked, nothing to fetch")
            return _response(200, json.dumps({
                'message': 'No groups tracked',
                'statistics': {'groups': 0, 'events_fetched': 0, 'events_sent': 0}
            }))

        logger.info(f"Fetching events for {len(groups)} tracked groups")
        events = fetcher.fetch_all(groups, limit=config.event_page_size)

        logger.info("Building digest")
        embeds = builder.build(events)

        if embeds:
            logger.info("Sending digest to Discord")
            notifier.send_message(INTRO_TEXT, embeds)
        else:
            logger.info("No events this month, nothing to send")

        duration = time.time() - start_time
        statistics = {
            'groups': len(groups),
            'events_fetched': len(events),
            'events_sent': len(embeds),
            'duration_seconds': round(duration, 2)
        }
        logger.info("Digest run completed successfully", extra=statistics)

        return _response(200, json.dumps({
            'message': 'Digest sent' if embeds else 'No events to send',
            'statistics': statistics
        }))

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Digest run failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        raise


def registration_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    HTTP handler that adds groups to the tracked registry.

    Expects ``token`` and ``group`` query string parameters, as delivered by
    a Lambda function URL or an API Gateway proxy integration.

    Args:
        event: HTTP request event
        context: Lambda context object

    Returns:
        HTTP response dict
    """
    config = Config.from_env()

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    params = event.get('queryStringParameters') or {}

    try:
        handler = RegistrationHandler(
            config=config,
            store=RegistryStore(table_name=config.table_name)
        )
        result = handler.register(params.get('token'), params.get('group'))
    except AuthenticationError as e:
        return _response(401, json.dumps({'Error': e.message}))
    except ValidationError as e:
        return _response(403, json.dumps({'Error': e.message}))
    except Exception as e:
        logger.error(
            f"Registration failed: {str(e)}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        raise

    logger.info("Registration completed", extra={'group_count': result.count})
    response = _response(200, result.message)
    response['headers'] = {'Content-Type': 'text/plain; charset=utf-8'}
    return response
