"""
Именованная модель – меш с именем из `o`/`g` в OBJ‑файле.
"""

from objmesh.scene.mesh import Mesh


class Model:
    """Связывает имя объекта с его `Mesh`."""
    def __init__(self, mesh: Mesh, name: str = "unnamed_object"):
        self.mesh = mesh
        self.name = name

    def __repr__(self):
        return f"Model(name={self.name!r}, mesh={self.mesh!r})"
