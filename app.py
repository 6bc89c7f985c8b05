"""Entry point for Streamlit deployment - redirects to app/app.py"""
import runpy
import sys
import os

here = os.path.dirname(__file__)
sys.path.insert(0, here)
sys.path.insert(0, os.path.join(here, "src"))
runpy.run_path(os.path.join(here, "app", "app.py"), run_name="__main__")
