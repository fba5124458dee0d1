"""Skill cooldown tracker — Entry point."""
from pathlib import Path

from src.core.channel import ChannelClosed, EventChannel
from src.core.classifier import InputClassifier
from src.core.cooldown import CooldownTimer
from src.core.invocations import build_hotkey_macros
from src.core.player import MacroPlayer
from src.core.settings_manager import SettingsManager
from src.tui.app import App
from src.tui.log_panel import LogPanel

BASE_DIR = Path(__file__).parent


def main() -> None:
    settings = SettingsManager(BASE_DIR / "settings.ini")
    log      = LogPanel(settings.log_max_lines, settings.log_level)

    events:  EventChannel = EventChannel()
    reports: EventChannel = EventChannel()

    def publish(report) -> None:
        try:
            reports.send(report)
        except ChannelClosed:
            log.log("DEBUG", f"dropped report after exit: {report}")

    player = MacroPlayer(
        keywait       = settings.keywait,
        allow_overlap = settings.allow_overlap,
        log_fn        = log.log,
        report_fn     = publish,
    )
    classifier = InputClassifier(
        events,
        player,
        build_hotkey_macros(BASE_DIR / settings.id_file),
        log_fn = log.log,
    )
    app = App(
        CooldownTimer(settings.cooldown_ms),
        events,
        reports,
        log,
        frame_ms = settings.frame_ms,
    )

    classifier.start()
    try:
        app.run()
    finally:
        events.close()
        reports.close()
        classifier.stop()


if __name__ == "__main__":
    main()
