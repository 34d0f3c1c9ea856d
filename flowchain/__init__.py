"""FlowChain analytics core: project/timesheet analytics and receipt OCR."""

__version__ = "1.0.0"
