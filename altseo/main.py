import argparse
import json

from altseo.bulk.factory import build_controller
from altseo.bulk.models import JobKind
from altseo.config.settings import Settings
from altseo.database.connection import close_pool, init_pool
from altseo.database.schema import apply_schema
from altseo.generation.factory import GeneratorFactory
from altseo.logging.logger import Log
from altseo.worker.poller import BulkPoller


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="altseo",
        description="Run or control a bulk keyword / alt text generation job.",
    )
    parser.add_argument("kind", choices=[kind.value for kind in JobKind])
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--stop", action="store_true", help="ask a running job to stop")
    action.add_argument("--reset", action="store_true", help="drop all persisted job state")
    action.add_argument("--status", action="store_true", help="print job progress as JSON")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> pool -> controller -> requested action."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    init_pool(settings)
    image_loader = GeneratorFactory.create_image_loader(settings)
    try:
        apply_schema()
        controller = build_controller(settings, image_loader=image_loader)
        if args.stop:
            return 0 if controller.request_stop(args.kind).success else 1
        if args.reset:
            controller.reset(args.kind)
            return 0
        if args.status:
            print(json.dumps(controller.status(args.kind).to_dict()))
            return 0

        poller = BulkPoller(controller, settings.bulk_poll_interval_seconds)
        result = poller.run(args.kind)
        return 0 if result is not None and result.finished else 1
    finally:
        image_loader.close()
        close_pool()


if __name__ == "__main__":
    raise SystemExit(main())
