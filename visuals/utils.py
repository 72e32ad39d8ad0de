import logging
import os
import matplotlib
import matplotlib.axes
import numpy as np

logger = logging.getLogger(__name__)


def face_colors_from_vertices(colors, faces):
    """
    Average the vertex colors of every triangle.

    Parameters
    ----------
    colors : np.ndarray
        Array of shape (N, 3) with RGB vertex colors in [0, 1].
    faces : np.ndarray
        Array of shape (M, 3) with face indices.

    Returns
    -------
    np.ndarray
        Array of shape (M, 3) with one RGB color per face.
    """
    colors = np.asarray(colors, dtype=float)
    faces = np.asarray(faces, dtype=np.int64)
    return np.clip(colors[faces].mean(axis=1), 0.0, 1.0)


def shade_face_colors(face_colors, normals, light_direction=(0.3, -0.6, 0.75), ambient=0.35):
    """Lambert shade flat face colors with a single directional light."""
    light = np.array(light_direction, dtype=float)
    light /= np.linalg.norm(light)
    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    lengths[lengths == 0.0] = 1.0
    intensity = np.clip((normals / lengths) @ light, 0.0, 1.0)
    return np.clip(face_colors * (ambient + (1.0 - ambient) * intensity)[:, None], 0.0, 1.0)


def setup_3d_axis_equal_aspect(ax, vertices_list):
    """
    Set up 3D axis with equal aspect ratio based on vertex data.

    Parameters:
    -----------
    ax : matplotlib.axes._subplots.Axes3DSubplot
        3D axis to configure
    vertices_list : list of numpy.ndarray or numpy.ndarray
        List of vertex arrays or single vertex array to determine bounds
    """
    if isinstance(vertices_list, list):
        all_points = np.vstack(vertices_list)
    else:
        all_points = vertices_list

    max_range = np.ptp(all_points, axis=0).max() / 2.0
    mid = (all_points.max(axis=0) + all_points.min(axis=0)) * 0.5

    ax.set_xlim(mid[0] - max_range, mid[0] + max_range)
    ax.set_ylim(mid[1] - max_range, mid[1] + max_range)
    ax.set_zlim(mid[2] - max_range, mid[2] + max_range)


def configure_axis_labels(ax, show_labels=True, title=None, fontsize_labels=8,
                          fontsize_title=10, fontsize_ticks=6):
    """
    Configure axis labels, title, and tick labels for both 2D and 3D axes.

    Parameters:
    -----------
    ax : matplotlib.axes.Axes or matplotlib.axes._subplots.Axes3DSubplot
        2D or 3D axis to configure
    show_labels : bool
        Whether to show axis labels and title
    title : str, optional
        Title text to display. If None and show_labels=True, no title is set.
    """
    is_3d = hasattr(ax, 'zaxis')

    if show_labels:
        ax.set_xlabel('X', fontsize=fontsize_labels)
        ax.set_ylabel('Y', fontsize=fontsize_labels)
        if is_3d:
            ax.set_zlabel('Z', fontsize=fontsize_labels)

        if title is not None:
            pad = 25 if is_3d else None
            ax.set_title(title, fontsize=fontsize_title, fontweight='bold', pad=pad)

        ax.tick_params(axis='both', which='major', labelsize=fontsize_ticks)
    else:
        ax.set_xlabel('')
        ax.set_ylabel('')
        ax.set_title('')
        if is_3d:
            ax.set_zlabel('')
        ax.tick_params(axis='both', which='major', labelbottom=False, labelleft=False)


def configure_3d_grid(ax: matplotlib.axes.Axes, show_grid=True, alpha=0.3):
    if show_grid:
        ax.grid(True, alpha=alpha)
    else:
        ax.grid(False)
        ax.set_axis_off()


def toggle_figure_title(fig, title_text=None, show_title=True, fontsize=12, fontweight='bold', **kwargs):
    """
    Toggle the title display on a matplotlib figure.

    Returns:
    --------
    matplotlib.text.Text or None
        The title text object if title is shown, None otherwise
    """
    if show_title and title_text is not None:
        return fig.suptitle(title_text, fontsize=fontsize, fontweight=fontweight, **kwargs)
    fig.suptitle('')
    return None


def create_3d_mesh_collection(vertices, faces, face_colors, show_wireframe=True, alpha=1.0,
                              edge_color=(0, 0, 0, 0.4)):
    """
    Create a 3D triangle collection for mesh visualization.

    Parameters
    ----------
    vertices : np.ndarray
        Array of shape (N, 3) with vertex coordinates.
    faces : np.ndarray
        Array of shape (M, 3) with face indices.
    face_colors : np.ndarray or str
        One RGB color per face, or a single matplotlib color.
    show_wireframe : bool, optional
        Whether to show wireframe edges, by default True.
    alpha : float, optional
        Transparency of the mesh, by default 1.0.

    Returns
    -------
    Poly3DCollection or None
        The 3D collection object ready to be added to an axis, or None if no faces.
    """
    from mpl_toolkits.mplot3d.art3d import Poly3DCollection

    faces = np.asarray(faces, dtype=np.int64)
    if len(faces) == 0:
        return None

    triangles = np.asarray(vertices, dtype=float)[faces]
    return Poly3DCollection(
        triangles,
        facecolors=face_colors,
        edgecolors=edge_color,
        linewidths=0.3 if show_wireframe else 0,
        alpha=alpha
    )


def save_figure_if_path_provided(fig, save_path=None, dpi=300, bbox_inches='tight',
                                 create_dirs=True, **kwargs):
    """
    Save a matplotlib figure to a file if a save path is provided.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        The figure to save.
    save_path : str, optional
        Path where to save the figure (relative or absolute). If None, no saving occurs.
        File extension determines the format (e.g., .png, .pdf, .svg, .jpg).
    dpi : int, optional
        Resolution in dots per inch, by default 300.
    create_dirs : bool, optional
        Whether to create parent directories if they don't exist, by default True.

    Returns
    -------
    str or None
        The path where the figure was saved, or None if no save_path was provided.
    """
    if save_path is None:
        return None

    if create_dirs:
        dir_path = os.path.dirname(save_path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)

    fig.savefig(save_path, dpi=dpi, bbox_inches=bbox_inches, **kwargs)
    logger.info("Figure saved to: %s", save_path)
    return save_path
