"""
Report generation: aggregation, section assembly and PDF rendering.

  aggregator  - pure totals/breakdowns over a transaction snapshot
  builder     - ordered section descriptors for monthly and annual windows
  formatting  - currency/date/text helpers
  renderer    - section descriptors -> paginated PDF
"""
