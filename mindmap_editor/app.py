# app.py
# Description: Command-line entry point for the mindmap editor
#
# Imports
import argparse
import os
from pathlib import Path
from typing import List, Optional
#
# 3rd-Party Imports
from loguru import logger
#
# Local Imports
from mindmap_editor import config
from mindmap_editor.logging_config import configure_logging
from mindmap_editor.Tools.Mind_Map.mindmap_graph import LayoutOrientation
from mindmap_editor.UI.Mindmap_Editor_Window import MindmapEditorApp
from mindmap_editor.Widgets.ad_slot import AdSlot, RecordingAdQueue
#
#######################################################################################################################
#
# Functions:

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="mindmap editor - keyboard driven mindmap editing in the terminal",
        prog="mindmap-editor"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a TOML config file (overrides MINDMAP_EDITOR_CONFIG)"
    )
    parser.add_argument(
        "--orientation",
        choices=[o.value for o in LayoutOrientation],
        help="Initial layout direction"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level for the file sink (e.g. DEBUG, INFO)"
    )
    return parser


def build_ad_slot() -> Optional[AdSlot]:
    unit = config.get_setting("ads", "unit", "")
    if not unit:
        return None
    section = config.load_settings().get("ads", {})
    return AdSlot(
        unit=unit,
        width=config._get_typed_value(section, "width", 320, int),
        height=config._get_typed_value(section, "height", 50, int),
        queue=RecordingAdQueue(),
        disabled=config._get_typed_value(section, "disabled", True, bool),
    )


def remember_orientation(orientation: LayoutOrientation) -> None:
    """Keep the last chosen layout direction as the next session's default."""
    if not config.save_setting_to_config("editor", "default_orientation", orientation.value):
        logger.warning(f"Could not persist layout direction '{orientation.value}'")


def create_app(orientation: Optional[str] = None) -> MindmapEditorApp:
    """Build the editor from the loaded configuration."""
    editor = config.load_settings().get("editor", {})
    return MindmapEditorApp(
        settings=config.get_layout_settings(),
        orientation=LayoutOrientation(orientation) if orientation else config.get_default_orientation(),
        default_label=config.get_setting("editor", "default_label", config.DEFAULT_LABEL),
        reset_on_orientation_change=config._get_typed_value(editor, "reset_on_orientation_change", True, bool),
        export_dir=Path(config.get_setting("export", "export_dir", ".")).expanduser(),
        csv_filename=config.get_setting("export", "csv_filename", "mindmap.csv"),
        ad_slot=build_ad_slot(),
        on_orientation_change=remember_orientation,
    )


def main_cli_runner(argv: Optional[List[str]] = None) -> None:
    """Entry point for the mindmap-editor command."""
    args = build_parser().parse_args(argv)

    if args.config:
        os.environ[config.CONFIG_PATH_ENV] = args.config
    config.load_settings(force_reload=True)

    configure_logging(
        level=args.log_level or config.get_setting("logging", "level", "INFO"),
        log_file=config.get_setting("logging", "log_file"),
    )

    app_instance = create_app(args.orientation)
    try:
        app_instance.run()
    except KeyboardInterrupt:
        logger.info("--- KeyboardInterrupt received ---")
    finally:
        logger.info("--- Mindmap editor exited ---")


if __name__ == "__main__":
    main_cli_runner()

#
# End of app.py
#######################################################################################################################
