import numpy as np
import matplotlib.pyplot as plt
from ..utils import (
    create_3d_mesh_collection,
    configure_axis_labels,
    configure_3d_grid,
    face_colors_from_vertices,
    save_figure_if_path_provided,
    setup_3d_axis_equal_aspect,
    toggle_figure_title,
)


def visualize_mesh_3d(mesh, title=None, show_wireframe=True, alpha=1.0, show_vertices=False,
                      show_labels=True, show_grid=True, show_title=True, save_path=None, show=True):
    """
    Visualize a triangle mesh using Matplotlib, colored by its vertex colors.

    Parameters
    ----------
    mesh : Mesh or dict
        Mesh object, or a dictionary as produced by ``mesh_to_dict``
    title : str, optional
        Figure title, by default describes the vertex and triangle counts
    show_wireframe : bool, optional
        Whether to show the triangle edges, by default True
    alpha : float, optional
        Transparency of the surface, by default 1.0
    show_vertices : bool, optional
        Whether to scatter the vertices on top of the surface, by default False
    show_labels : bool, optional
        Whether to show axis labels and title, by default True
    show_grid : bool, optional
        Whether to show the 3D grid, by default True
    show_title : bool, optional
        Whether to show the figure title, by default True
    save_path : str, optional
        Path where to save the figure. If None, figure is not saved.
    show : bool, optional
        Whether to call ``plt.show()``, by default True

    Returns
    -------
    matplotlib.figure.Figure
        The created figure
    """
    if isinstance(mesh, dict):
        vertices = np.array(mesh["vertices"], dtype=float)
        faces = np.array(mesh["faces"], dtype=np.int64).reshape((-1, 3))
        colors = np.array(mesh.get("colors", np.ones_like(vertices)), dtype=float)
    else:
        vertices, faces, colors = mesh.positions(), mesh.faces(), mesh.colors()

    fig = plt.figure(figsize=(10, 10))
    ax = fig.add_subplot(111, projection='3d')

    collection = create_3d_mesh_collection(
        vertices, faces, face_colors_from_vertices(colors, faces), show_wireframe, alpha
    )
    if collection:
        ax.add_collection3d(collection)

    if show_vertices:
        ax.scatter(vertices[:, 0], vertices[:, 1], vertices[:, 2], color='k', s=2, alpha=0.6)

    ax.set_box_aspect([1, 1, 1])
    setup_3d_axis_equal_aspect(ax, vertices)

    title_text = title or f'Mesh ({len(vertices)} vertices, {len(faces)} triangles)'
    configure_axis_labels(ax, show_labels=show_labels, title=None,
                          fontsize_labels=12, fontsize_title=14)
    toggle_figure_title(fig, title_text, show_title, fontsize=16)
    configure_3d_grid(ax, show_grid=show_grid)

    plt.tight_layout()
    save_figure_if_path_provided(fig, save_path)

    if show:
        plt.show()
    return fig
