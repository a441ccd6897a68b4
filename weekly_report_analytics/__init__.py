"""
Weekly Report Analytics: 13 Week Report extraction and insights

Analytics backend for turning uploaded multi-sheet staffing reports into
per-cost-center weekly series, derived KPIs, and automatic findings.

To extract a workbook:
    loaders.extract_report(data, file_name) returns a ParsedReport with one
    SheetData per sheet. Undecodable bytes raise loaders.ParseError.

To connect to a front end:
    Call dashboard.get_sheet_overview(report, sheet_name, permissions) for a
    plain dict of cards, trend frame, derived metrics, and findings.

To change the spreadsheet layout:
    Edit the row constants and config.NUMERIC_COLUMNS / config.TEXT_COLUMNS;
    the extractor reads every column position from those tables.
"""
