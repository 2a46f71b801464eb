"""Command-line entry point for the record dashboard."""

import argparse
import os
import sys
from typing import List, Optional

from common.config import Config
from common.logging_setup import setup_logging, get_logger
from records import RECORD_KINDS
from storage import JsonStore, StoreError
from ui_service import ChannelError, Dashboard, InputPump, Terminal, TerminalError, default_key_source

logger = get_logger(__name__)


def clear_screen():
    """Clear the terminal screen."""
    os.system('cls' if os.name == 'nt' else 'clear')


def parse_args(argv: Optional[List[str]] = None) -> Config:
    """
    Parse command-line arguments into a Config.
    
    Args:
        argv: Argument list (defaults to sys.argv[1:])
        
    Returns:
        Populated configuration
    """
    defaults = Config()
    parser = argparse.ArgumentParser(
        description="Terminal dashboard for a JSON-backed record collection",
    )
    
    parser.add_argument(
        "--db",
        default=defaults.db_path,
        help="Path to the JSON array store",
    )
    
    parser.add_argument(
        "--kind",
        default=defaults.record_kind,
        choices=sorted(RECORD_KINDS),
        help="Record kind held by the store",
    )
    
    parser.add_argument(
        "--tick-rate",
        type=int,
        default=defaults.tick_rate_ms,
        help="Redraw tick interval in milliseconds",
    )
    
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    
    parser.add_argument(
        "--log-file",
        help="Log file path (optional; nothing is logged without it)",
    )
    
    args = parser.parse_args(argv)
    return Config(
        db_path=args.db,
        record_kind=args.kind,
        tick_rate_ms=args.tick_rate,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def run(config: Config) -> int:
    """
    Run the dashboard until quit.
    
    Returns:
        Process exit code
    """
    record_type = RECORD_KINDS[config.record_kind]
    store = JsonStore(
        config.db_path,
        record_type,
        retries=config.store_retries,
        retry_backoff=config.store_retry_backoff,
    )
    
    try:
        store.ensure_exists()
        with Terminal() as terminal:
            pump = InputPump(default_key_source(), tick_rate=config.tick_rate)
            pump.start()
            dashboard = Dashboard(
                record_type,
                store,
                pump,
                terminal,
                notice_ttl=config.notice_ttl_s,
            )
            dashboard.run()
    except KeyboardInterrupt:
        pass
    except (StoreError, TerminalError, ChannelError) as e:
        logger.error(f"Dashboard stopped: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    clear_screen()
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    config = parse_args(argv)
    setup_logging(level=config.log_level, log_file=config.log_file)
    sys.exit(run(config))


if __name__ == "__main__":
    main()
