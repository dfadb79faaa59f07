from boxoffice.reports.filters import ReportFilters
from boxoffice.reports.layout import ReportLayout, LayoutCursor, DEFAULT_LAYOUT, UnsortedGroupError
from boxoffice.reports.generator import ReportGenerator, REPORT_TITLES, report_filename
