"""
URL configuration for the hospital patient records project.

The `urlpatterns` list routes URLs to views.  All application routes
live in ``records.routers``; Prometheus metrics are exposed at ``/metrics``.
"""
from django.urls import path, include

urlpatterns = [
    path('', include('records.routers')),
    path('', include('django_prometheus.urls')),
]
