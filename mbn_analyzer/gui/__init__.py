"""GUI package - interactive ipywidgets notebook panel.

The panel loads MBN ``.db`` recordings, runs the analysis pipeline and prints
per-signal feature reports (mean, RMS, ringing, envelope peaks) into a log.

Entry point:
    from mbn_analyzer.gui.app import build_gui
    gui = build_gui()
"""
