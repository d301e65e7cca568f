"""Live, sortable table view over a collection of timers."""
