"""
Utility functions module.

Time Semantics:
- Calculations never read the wall clock; "now" is always passed in
- The wall clock is read only at the journal boundary (local_now)
- Month boundaries use the timezone of the "now" they are derived from
- Stored timestamps are ISO-8601 strings
"""
