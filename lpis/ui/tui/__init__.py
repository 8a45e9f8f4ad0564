"""
Terminal checklist UI — rendering, key decoding and the session loop.
"""
