import math
import numpy as np

CAMERA_SOURCE = (1.5, -5.0, 3.0)
CAMERA_TARGET = (0.0, 0.0, 0.0)
CAMERA_UP = (0.0, 0.0, 1.0)

FOV_DEGREES = 45.0
ASPECT = 1.0
NEAR = 1.0
FAR = 10.0


def look_at(source, target, up):
    """
    Right-handed view matrix looking from ``source`` towards ``target``.

    Parameters
    ----------
    source, target, up : sequence of float
        Eye position, point looked at and the world up direction.

    Returns
    -------
    np.ndarray
        4x4 view matrix acting on column vectors.
    """
    source = np.asarray(source, dtype=float)
    forward = np.asarray(target, dtype=float) - source
    forward /= np.linalg.norm(forward)
    side = np.cross(forward, np.asarray(up, dtype=float))
    side /= np.linalg.norm(side)
    upward = np.cross(side, forward)

    view = np.identity(4)
    view[0, :3] = side
    view[1, :3] = upward
    view[2, :3] = -forward
    view[:3, 3] = -view[:3, :3] @ source
    return view


def perspective(fov_degrees, aspect, near, far):
    """OpenGL style perspective projection mapping depth to [-1, 1]."""
    f = 1.0 / math.tan(math.radians(fov_degrees) / 2.0)
    projection = np.zeros((4, 4))
    projection[0, 0] = f / aspect
    projection[1, 1] = f
    projection[2, 2] = (far + near) / (near - far)
    projection[2, 3] = 2.0 * far * near / (near - far)
    projection[3, 2] = -1.0
    return projection


def rotation_z(degrees):
    r = math.radians(degrees)
    c, s = math.cos(r), math.sin(r)
    rotation = np.identity(4)
    rotation[0, 0], rotation[0, 1] = c, -s
    rotation[1, 0], rotation[1, 1] = s, c
    return rotation


def default_transform(angle=0.0):
    """Projection * camera * spin rotation, as fed to the shader."""
    view = look_at(CAMERA_SOURCE, CAMERA_TARGET, CAMERA_UP)
    projection = perspective(FOV_DEGREES, ASPECT, NEAR, FAR)
    return projection @ view @ rotation_z(angle)


def to_column_major(matrix):
    """Nested float32 columns, the layout of the ``u_Transform`` uniform."""
    return np.asarray(matrix, dtype=np.float32).T.copy()


def project(transform, vertices):
    """
    Apply a 4x4 transform to (N, 3) points and divide by w.

    Returns
    -------
    np.ndarray
        (N, 3) normalized device coordinates.
    """
    vertices = np.asarray(vertices, dtype=float)
    homogeneous = np.hstack([vertices, np.ones((len(vertices), 1))])
    clip = homogeneous @ np.asarray(transform, dtype=float).T
    return clip[:, :3] / clip[:, 3:4]
