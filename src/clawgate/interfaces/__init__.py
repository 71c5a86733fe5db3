"""HTTP and other external interfaces."""
