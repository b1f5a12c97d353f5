"""
This package contains all modules related to parsing and encoding data
exchanged with the DE1 controller over its serial link.

Sub-packages handle specific layers:

- ``serial``: ASCII line framing and the incremental line reader.
- ``commands``: The command table (serial character, channel id, length).
- ``packets``: Typed payload records and frame <-> packet conversion.
"""
