"""Standalone vehicle created event consumer.

Run with ``python -m app.consumer``.
"""

from dotenv import load_dotenv

from app.infrastructure.logging.logger import log_event
from app.infrastructure.wiring.dependencies import create_vehicle_created_consumer


def main() -> None:
    load_dotenv()
    consumer = create_vehicle_created_consumer()
    try:
        consumer.run()
    except KeyboardInterrupt:
        log_event(component="kafka_consumer", event="consumer_interrupted")


if __name__ == "__main__":
    main()
