import json
import shutil
import subprocess
import sys
import unittest
from pathlib import Path

import pandas as pd


class DashboardRunTest(unittest.TestCase):
    def test_dashboard_outputs_exist(self):
        root = Path(__file__).resolve().parents[1]
        out_dir = root / "outputs" / "test_dashboard_run"
        if out_dir.exists():
            shutil.rmtree(out_dir)

        cmd = [
            sys.executable,
            str(root / "scripts" / "run_dashboard.py"),
            "--profile",
            "fast",
            "--seed",
            "123",
            "--ticks",
            "2",
            "--out",
            str(out_dir),
        ]
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            print("STDOUT:\n", result.stdout)
            print("STDERR:\n", result.stderr)
        self.assertEqual(result.returncode, 0)

        self.assertTrue((out_dir / "metadata.json").exists())
        self.assertTrue((out_dir / "ticks.csv").exists())
        self.assertTrue((out_dir / "trend.csv").exists())
        self.assertTrue((out_dir / "run.log").exists())
        self.assertTrue((out_dir / "plots").exists())
        plots = list((out_dir / "plots").glob("*.png"))
        self.assertGreaterEqual(len(plots), 2)

        metadata = json.loads((out_dir / "metadata.json").read_text(encoding="utf-8"))
        self.assertEqual(metadata["tick_count"], 2)
        self.assertEqual(metadata["step_failures"], {})

        ticks = pd.read_csv(out_dir / "ticks.csv")
        self.assertEqual(len(ticks), 2)
        self.assertTrue((ticks["step_kpis"] == "ok").all())

        trend = pd.read_csv(out_dir / "trend.csv")
        self.assertEqual(len(trend), 24)


if __name__ == "__main__":
    unittest.main()
