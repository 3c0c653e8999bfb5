"""Student report generation service.

``reportcard`` combines a student records backend with a report
orchestrator that fetches a student over HTTP and renders a PDF report.
"""
