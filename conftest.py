"""
conftest.py — Configuración global de pytest.
Permite `import core` desde los tests sin instalar el paquete.
"""
import os
import sys

sys.path.insert(0, os.path.dirname(__file__))
