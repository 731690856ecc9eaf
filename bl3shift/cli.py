"""Command line entry point"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .catalog import CodeCatalog
from .config import Config
from .engine import ReconcileResult, effective_platforms, reconcile
from .exceptions import ConfigError, FetchError, ShiftError
from .history import HistoryStore
from .logs import (Colors, log, log_code, log_error, log_info, log_section,
                   log_success, log_warning, setup_logging)
from .models import RedemptionHistory, ShiftCode
from .redeemer import ShiftClient
from .session import ShiftSession


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bl3shift",
        description="Redeem Borderlands 3 SHiFT codes on every platform linked to your account.",
    )
    parser.add_argument("--email", help="SHiFT account email (default: $SHIFT_EMAIL)")
    parser.add_argument("--password", "--psw", dest="password", help="SHiFT account password (default: $SHIFT_PASSWORD)")
    parser.add_argument("--shift-code", help="Single SHiFT code to redeem")
    parser.add_argument("--allow-inactive", action="store_true", default=None,
                        help="Attempt to redeem SHiFT codes even if they are inactive")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    overrides = {
        "SHIFT_EMAIL": args.email,
        "SHIFT_PASSWORD": args.password,
        "ALLOW_INACTIVE": "1" if args.allow_inactive else None,
        "VERBOSE": "1" if args.verbose else None,
    }
    return Config(overrides)


class ShiftCodeManager:
    """Main application orchestrator"""

    def __init__(self, cfg: Config, single_code: Optional[str] = None):
        self.config = cfg
        self.single_code = single_code.strip().upper() if single_code else None
        self.session = ShiftSession(cfg)
        self.catalog = CodeCatalog(cfg)
        self.store = HistoryStore(cfg.history_dir)

    def run(self) -> ReconcileResult:
        """Main execution flow"""
        if not self.config.email or not self.config.password:
            raise ConfigError("an email and a password are required (--email/--password or SHIFT_EMAIL/SHIFT_PASSWORD)")

        remote_version = self.session.load_remote_config()
        if remote_version and remote_version != __version__:
            log_warning(f"Your version ({__version__}) is out of date, please consider upgrading to {remote_version}")

        log(f"Logging in as '{self.config.email}'...")
        client = ShiftClient(self.session.login(self.config.email, self.config.password), self.config)
        log_success("Logged in")

        log("Getting SHIFT platforms...")
        try:
            platforms = client.get_user_platforms()
        except ShiftError as e:
            raise FetchError(f"could not get shift platforms: {e}") from e
        log_info(f"Platforms: {', '.join(platforms) if platforms else 'none'}")

        key = HistoryStore.key_for(self.config.email)
        history = self.store.load(key) or RedemptionHistory()

        codes = self._get_codes(client)

        log_section("Code Redemption")
        outcome = reconcile(codes, platforms, history, client.redeem)

        if not outcome.attempted:
            self._report_nothing_to_do(codes, outcome.history, platforms)
            return outcome

        self.store.save(key, outcome.history)
        if outcome.success_count:
            log_success(f"{outcome.success_count} code{'s' if outcome.success_count != 1 else ''} successfully redeemed")
        return outcome

    def _get_codes(self, client: ShiftClient) -> List[ShiftCode]:
        if self.single_code:
            log(f'Checking single SHIFT code "{self.single_code}"...')
            try:
                code_platforms = client.get_code_platforms(self.single_code)
            except ShiftError as e:
                raise FetchError(f"could not get SHIFT code info: {e}") from e
            if not code_platforms:
                raise FetchError("no valid platforms available for this code")
            return [ShiftCode(code=self.single_code, platforms=code_platforms)]

        log("Getting new SHIFT codes...")
        try:
            codes = self.catalog.fetch_codes()
        except ShiftError as e:
            raise FetchError(f"could not get new SHIFT codes: {e}") from e
        log_info(f"{len(codes)} SHIFT codes listed")
        return codes

    def _report_nothing_to_do(self, codes: List[ShiftCode], history: RedemptionHistory, platforms: List[str]):
        if not self.single_code:
            log_info("No new SHIFT codes at this time. Try again later.")
            return

        redeemed = [p for code in codes for p in effective_platforms(code, platforms)
                    if history.contains(code.code, p)]
        if not redeemed:
            raise ShiftError("the SHIFT code could not be redeemed at this time. Try again later")
        for platform in redeemed:
            log_code(self.single_code, "SKIPPED", f"already redeemed on {platform}", Colors.YELLOW)


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point"""
    args = parse_args(argv)
    cfg = config_from_args(args)
    setup_logging(cfg.verbose)

    log_section(f"BL3 AutoSHiFT v{__version__}", show_time=True)

    try:
        ShiftCodeManager(cfg, args.shift_code).run()
    except ShiftError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        log_error("Interrupted by user")
        return 1

    log_success("all done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
