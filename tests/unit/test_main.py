#!/usr/bin/env python3
"""
Unit tests for the command-line entry point.
"""

import io
import json
import logging
import os
import tempfile
import unittest
from unittest.mock import patch

import pytest
import yaml

import main
from jobmatch.config_loader import LoggingConfig
from tests.fixtures.match_fixtures import (
    MISMATCH_SALARY,
    SCENARIO_OPPORTUNITY,
    SCENARIO_PROFILE,
    make_opportunity,
)


@pytest.mark.cli
class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

        self.profile_path = self._write("profile.json", json.dumps(SCENARIO_PROFILE))
        self.opportunities_path = self._write("jobs.yaml", yaml.dump([
            SCENARIO_OPPORTUNITY,
            make_opportunity(id="low-pay", title="Underpaid role", salary={"min": 20000, "max": 25000}),
        ]))

    def _write(self, name, content):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as f:
            f.write(content)
        return path

    def _run(self, *extra):
        argv = ["--profile", self.profile_path, "--opportunities", self.opportunities_path,
                "--as-of", "2025-01-15", *extra]
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = main.main(argv)
        return code, out.getvalue()

    def test_json_output_ranked(self):
        code, output = self._run("--format", "json", "--min-score", "0")
        data = json.loads(output)

        self.assertEqual(code, 0)
        self.assertEqual([r['opportunity_id'] for r in data], ["scenario-1", "low-pay"])
        self.assertEqual(data[0]['overall_score'], 97)

    def test_min_score_filters(self):
        code, output = self._run("--format", "json", "--min-score", "90")

        self.assertEqual(code, 0)
        self.assertEqual([r['opportunity_id'] for r in json.loads(output)], ["scenario-1"])

    def test_top_k(self):
        code, output = self._run("--format", "json", "--min-score", "0", "--top-k", "1")
        self.assertEqual(len(json.loads(output)), 1)

    def test_text_output(self):
        code, output = self._run("--workers", "2")

        self.assertEqual(code, 0)
        self.assertIn("scenario-1", output)
        self.assertIn("Frontend Developer", output)
        self.assertIn("- Strong skills match", output)

    def test_wrapped_opportunity_list_and_config(self):
        self.opportunities_path = self._write("wrapped.json", json.dumps({"opportunities": [
            make_opportunity(id="wrapped", salary=MISMATCH_SALARY)
        ]}))
        config_path = self._write("config.yaml", yaml.dump({"matching": {"result_policy": {"min_score": 0}}}))

        code, output = self._run("--format", "json", "--config", config_path)

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(output)[0]['opportunity_id'], "wrapped")

    def test_missing_file(self):
        self.profile_path = os.path.join(self.tmp.name, "nope.json")
        code, _ = self._run()
        self.assertEqual(code, 1)

    def test_invalid_profile(self):
        self.profile_path = self._write("bad.json", json.dumps({"skills": ["Python"]}))
        code, _ = self._run()
        self.assertEqual(code, 1)

    def test_profile_must_be_mapping(self):
        self.profile_path = self._write("list.json", json.dumps([SCENARIO_PROFILE]))
        code, _ = self._run()
        self.assertEqual(code, 1)

    def test_bad_config(self):
        config_path = self._write("bad.yaml", yaml.dump({"matching": {"weights": {"skills": 2}}}))
        code, _ = self._run("--config", config_path)
        self.assertEqual(code, 1)

    def test_out_of_range_min_score(self):
        code, _ = self._run("--min-score", "150")
        self.assertEqual(code, 2)

    def test_bad_as_of(self):
        with self.assertRaises(SystemExit) as ctx:
            main.main(["--profile", self.profile_path, "--opportunities", self.opportunities_path,
                       "--as-of", "yesterday"])
        self.assertEqual(ctx.exception.code, 2)

    def test_non_positive_workers_rejected(self):
        for value in ("0", "-3", "two"):
            with self.assertRaises(SystemExit) as ctx:
                self._run("--workers", value)
            self.assertEqual(ctx.exception.code, 2)

    def test_non_positive_top_k_rejected(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("--top-k", "0")
        self.assertEqual(ctx.exception.code, 2)


class TestConfigureLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self.stream = io.StringIO()
        self.handler = logging.StreamHandler(self.stream)
        self.root.addHandler(self.handler)
        self.addCleanup(self.root.removeHandler, self.handler)
        self.addCleanup(self.root.setLevel, self.root.level)

    def test_format_and_level_applied(self):
        main.configure_logging(LoggingConfig(level="WARNING", format="CUSTOM %(levelname)s %(message)s"))

        logging.getLogger("jobmatch.cli").info("hidden")
        logging.getLogger("jobmatch.cli").warning("shown")

        self.assertEqual(self.root.level, logging.WARNING)
        self.assertEqual(self.stream.getvalue(), "CUSTOM WARNING shown\n")


if __name__ == '__main__':
    unittest.main()
