"""
Industry benchmarks: per-industry, per-size-tier KPI ranges used to fill
missing inputs, rate performance and weight confidence.

Modules
-------
industry : BENCHMARKS table + size_tier() / size_band() normalisation +
           get_benchmark_value() / get_performance_percentile() /
           calculate_benchmark_confidence() + static strategy lists.
"""
