"""
Interactive keyboard driven mesh viewer.

Projects the mesh with the same projection * camera * rotation transform the
shader receives and paints the triangles back to front with matplotlib. The
spin angle and the shader parameters are driven from the keyboard, see
``visuals.controls`` for the bindings.
"""

import logging
import time
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

from .camera import project, rotation_z
from .controls import ShaderParameters, ViewerState, KeyAction, handle_key
from .utils import face_colors_from_vertices, shade_face_colors

logger = logging.getLogger(__name__)

CLEAR_COLOR = (0.1, 0.2, 0.3, 1.0)


class MeshViewer:
    def __init__(self, mesh, params=None, state=None, interval_ms=16, cull_backfaces=True):
        self.params = params or ShaderParameters()
        self.state = state or ViewerState()
        self.cull_backfaces = cull_backfaces

        self.positions = mesh.positions()
        self.faces = mesh.faces()
        self.face_colors = face_colors_from_vertices(mesh.colors(), self.faces)

        self.fig, self.ax = plt.subplots(figsize=(8, 8))
        self.fig.patch.set_facecolor(CLEAR_COLOR)
        self.ax.set_facecolor(CLEAR_COLOR)
        self.ax.set_xlim(-1.0, 1.0)
        self.ax.set_ylim(-1.0, 1.0)
        self.ax.set_aspect('equal')
        self.ax.set_axis_off()

        self.collection = PolyCollection([], edgecolors='none')
        self.ax.add_collection(self.collection)

        # The default handler binds most of the parameter keys (s, f, g, ...)
        manager = self.fig.canvas.manager
        if manager is not None and getattr(manager, "key_press_handler_id", None) is not None:
            self.fig.canvas.mpl_disconnect(manager.key_press_handler_id)
        self.fig.canvas.mpl_connect('key_press_event', self._on_key)

        self.timer = self.fig.canvas.new_timer(interval=interval_ms)
        self.timer.add_callback(self._on_tick)
        self._previous_time = time.perf_counter()

    def render(self):
        """Project, cull and depth sort the triangles for the current angle."""
        transform = self.state.transform()
        self.params.set_transform(transform)

        ndc = project(transform, self.positions)
        triangles = ndc[self.faces]

        edge_1 = triangles[:, 1, :2] - triangles[:, 0, :2]
        edge_2 = triangles[:, 2, :2] - triangles[:, 0, :2]
        signed_area = edge_1[:, 0] * edge_2[:, 1] - edge_1[:, 1] * edge_2[:, 0]
        visible = signed_area > 0.0 if self.cull_backfaces else np.ones(len(triangles), dtype=bool)

        world = self.positions @ rotation_z(self.state.angle)[:3, :3].T
        world_triangles = world[self.faces]
        normals = np.cross(world_triangles[:, 1] - world_triangles[:, 0],
                           world_triangles[:, 2] - world_triangles[:, 0])
        colors = shade_face_colors(self.face_colors, normals)

        # Far triangles first
        depth = triangles[:, :, 2].mean(axis=1)
        order = np.argsort(-depth[visible], kind="stable")
        self.collection.set_verts(triangles[visible][order][:, :, :2])
        self.collection.set_facecolors(colors[visible][order])

        self.ax.set_title(self._title(), color='white', fontsize=9)
        return self.collection

    def _title(self):
        values = "  ".join(f"{k}={v:g}" for k, v in self.params.scalars().items())
        return f"angle={self.state.angle:.1f}  {values}"

    def _on_key(self, event):
        action = handle_key(event.key, self.params, self.state)
        if action == KeyAction.QUIT:
            self.close()
        elif action != KeyAction.IGNORED:
            self.render()
            self.fig.canvas.draw_idle()

    def _on_tick(self):
        now = time.perf_counter()
        self.state.advance(now - self._previous_time)
        self._previous_time = now
        if not self.state.running:
            self.close()
            return
        self.render()
        self.fig.canvas.draw_idle()

    def close(self):
        self.timer.stop()
        plt.close(self.fig)

    def show(self):
        self.render()
        self._previous_time = time.perf_counter()
        self.timer.start()
        plt.show()
