"""
Пакет scene – результат загрузки: меши и модели.
"""

from objmesh.scene.mesh import Mesh
from objmesh.scene.model import Model

__all__ = ["Mesh", "Model"]
