"""Tests for the command-line argument handling."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexarena.__main__ import _build_parser, _config_from_args
from hexarena.config import SimulationConfig


class TestConfigFromArgs:
    def test_cli_arguments(self):
        args = _build_parser().parse_args(
            ["cli", "--seed", "9", "--width", "6", "--height", "4", "--entities", "3", "--ticks", "50"]
        )
        cfg = _config_from_args(args, max_ticks=args.ticks)
        assert isinstance(cfg, SimulationConfig)
        assert (cfg.seed, cfg.map_width, cfg.map_height, cfg.entity_count) == (9, 6, 4, 3)
        assert cfg.max_ticks == 50

    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        cfg = _config_from_args(args)
        assert cfg == SimulationConfig()
        assert (args.host, args.port) == ("127.0.0.1", 8000)
