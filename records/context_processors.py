def principal(request):
    """Expose the session principal to templates (``None`` when anonymous)."""
    return {'principal': getattr(request, 'principal', None)}
