# config/views.py

# Import HttpResponse from django.http because 'healthz' returns a plain text body.
from django.http import HttpResponse

"""
Author:
A tiny endpoint NGINX and uptime monitors can hit to confirm the
uWSGI workers are answering. It never touches the database.
"""
def healthz(request):
    return HttpResponse("ok", content_type="text/plain")
