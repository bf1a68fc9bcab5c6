# monitoring/views.py
"""
Staff view over the HTML application log.
"""

from django.contrib.admin.views.decorators import staff_member_required
from django.http import HttpResponse

from .html_logger import FOOTER, log_file

EMPTY_LOG = "<!doctype html><p>No log entries yet.</p>"


@staff_member_required
def logs_view(request):
    """
    Serve ``app.log.html`` as a page, closed with the HTML footer.

    Non-staff users are sent to the admin login.
    """
    path = log_file()
    content = path.read_text(encoding="utf-8") + FOOTER if path.exists() else EMPTY_LOG
    return HttpResponse(content, content_type="text/html; charset=utf-8")
