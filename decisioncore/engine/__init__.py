"""
decisioncore Calculation Engines.

Components:
- sampling: injectable normal/uniform samplers, percentile interpolation
- monte_carlo: randomized cost projection → percentiles, histogram, monthly bands
- projection: deterministic low/mid/high cost projection at milestones
- risk_evaluator: composite R = (P × I × V) / C per risk domain, risk surface map
- stress_tester: shock conditions → resilience scores and failure points
- economic: cost avoidance + programme acceleration → net ROI
- ranking: weighted multi-criteria scenario ranking
"""
