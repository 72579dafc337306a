"""Chart payload rendering for Analysis Engine views.

Engine DTOs are keyed by bound name; this package turns them into the
registry-aligned arrays the Chart.js dashboard expects.
"""
