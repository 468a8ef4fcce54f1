"""End-to-end tests for the command line runner."""

import json
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd

from zipfbench.cli import main


class TestCommandLine(unittest.TestCase):
    """Run the CLI against the in-process bitmap store."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.config_path = self.test_dir / "zipf.json"
        self.config_path.write_text(json.dumps({
            "bitmap-id-range": 1000,
            "profile-id-range": 500,
            "base-profile-id": 10000,
            "iterations": 50,
            "seed": 5,
            "index": "bench",
            "frame": "f",
            "bitmap-exponent": 1.5,
            "bitmap-ratio": 0.01,
            "profile-exponent": 1.1,
            "profile-ratio": 0.2,
        }))

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_run_writes_results(self):
        output = self.test_dir / "out" / "results.json"
        code = main([
            "--config", str(self.config_path),
            "--agents", "2",
            "--output", str(output),
            "--log-level", "WARNING",
        ])
        self.assertEqual(code, 0)

        data = json.loads(output.read_text())
        self.assertEqual(data["config"]["seed"], 5)
        self.assertEqual(len(data["agents"]), 2)
        for agent, result in enumerate(data["agents"]):
            self.assertEqual(result["agent"], agent)
            self.assertEqual(result["count"], 50)
            self.assertNotIn("error", result)

    def test_trace_and_plot(self):
        trace_path = self.test_dir / "trace.csv"
        plot_path = self.test_dir / "rank_frequency.png"
        code = main([
            "--config", str(self.config_path),
            "--iterations", "80",
            "--output", str(self.test_dir / "results.json"),
            "--trace-csv", str(trace_path),
            "--plot", str(plot_path),
            "--log-level", "WARNING",
        ])
        self.assertEqual(code, 0)

        trace = pd.read_csv(trace_path)
        self.assertEqual(len(trace), 80)
        self.assertTrue((trace["column_id"] >= 10000).all())
        self.assertTrue((trace["column_id"] < 10500).all())
        self.assertTrue(plot_path.exists())

    def test_overrides_and_invalid_config(self):
        code = main([
            "--config", str(self.config_path),
            "--operation", "clear",
            "--seed", "-3",
            "--output", str(self.test_dir / "clear.json"),
            "--log-level", "WARNING",
        ])
        self.assertEqual(code, 0)

        bad = self.test_dir / "bad.json"
        bad.write_text(json.dumps({"operation": "flip"}))
        code = main(["--config", str(bad), "--output", str(self.test_dir / "bad_out.json"), "--log-level", "ERROR"])
        self.assertEqual(code, 2)
        self.assertFalse((self.test_dir / "bad_out.json").exists())

    def _exit_code_for(self, *extra):
        output = self.test_dir / "never.json"
        code = main([*extra, "--output", str(output), "--log-level", "CRITICAL"])
        self.assertFalse(output.exists())
        return code

    def test_mistyped_config_value_is_rejected(self):
        bad = self.test_dir / "typed.json"
        bad.write_text(json.dumps({"bitmap-ratio": "0.1"}))
        self.assertEqual(self._exit_code_for("--config", str(bad)), 2)

    def test_missing_config_file_is_rejected(self):
        self.assertEqual(self._exit_code_for("--config", str(self.test_dir / "absent.json")), 2)

    def test_malformed_config_file_is_rejected(self):
        bad = self.test_dir / "broken.json"
        bad.write_text("{\"iterations\": 10,")
        self.assertEqual(self._exit_code_for("--config", str(bad)), 2)

    def test_agent_count_must_be_positive(self):
        self.assertEqual(self._exit_code_for("--config", str(self.config_path), "--agents", "0"), 2)


if __name__ == "__main__":
    unittest.main()
