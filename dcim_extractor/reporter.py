"""Reporting for extraction runs."""

import logging
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)


class ExtractionReporter:
    """Generates human-readable summaries of an extraction run."""

    def generate_summary_report(self, results: Dict[str, Any]) -> str:
        """
        Generate human-readable summary report.

        Args:
            results: Results from DeviceExtractor.run()

        Returns:
            Formatted summary report
        """
        primary = results.get('primary', {})
        mutations = results.get('mutations', {})
        skipped = primary.get('skipped_dirs', [])

        report = []
        report.append("=" * 50)
        report.append("DEVICE EXTRACTION SUMMARY REPORT")
        report.append("=" * 50)
        report.append(f"Completed: {results.get('timestamp', 'Unknown')}")
        report.append(f"Mode: {'DRY RUN' if results.get('dry_run', False) else 'LIVE RUN'}")
        report.append(f"Operation: {'move' if results.get('mode') == 'mv' else 'copy'}")
        report.append(f"Source: {results.get('mount', 'N/A')}")
        report.append(f"Target: {results.get('target', 'N/A')}")
        report.append("")

        report.append("=== PRIMARY MEDIA ===")
        report.append(f"• Files transferred: {primary.get('transferred', 0):,}")
        report.append(f"• Directories skipped: {len(skipped):,}")
        for path in skipped:
            report.append(f"    - {path}")
        report.append("")

        report.append("=== EDITED RENDERS ===")
        report.append(f"• Renders transferred: {mutations.get('transferred', 0):,}")
        report.append(f"• Asset folders without render: {mutations.get('assets_without_render', 0):,}")
        report.append("")

        if results.get('dry_run', False):
            report.append("Nothing was copied or moved. Re-run without --dry-run to extract.")
        else:
            total = primary.get('transferred', 0) + mutations.get('transferred', 0)
            report.append(f"STATUS: {total:,} files extracted")

        return "\n".join(report)

    def save_report(self, results: Dict[str, Any], filename: str) -> str:
        """
        Save summary report to file.

        Args:
            results: Results dictionary
            filename: Report file path

        Returns:
            Path to saved report file
        """
        report_file = Path(filename)
        report_file.parent.mkdir(parents=True, exist_ok=True)

        report_content = self.generate_summary_report(results)

        try:
            with open(report_file, 'w') as f:
                f.write(report_content)

            logger.info(f"Report saved: {report_file}")
            return str(report_file)

        except OSError as e:
            logger.error(f"Failed to save report: {e}")
            raise
