from __future__ import annotations

from typing import Any, Callable, Sequence

from .camera_controller import PointerState

Vec3 = tuple[float, float, float]

# Tried in order; the first config the driver accepts wins.
_MAC_CONFIGS: list[dict[str, Any]] = [
    {"double_buffer": True, "depth_size": 24, "sample_buffers": 0, "samples": 0},
    {"double_buffer": True, "depth_size": 16, "sample_buffers": 0, "samples": 0},
]
_DEFAULT_CONFIGS: list[dict[str, Any]] = [
    {"double_buffer": True, "depth_size": 24, "sample_buffers": 1, "samples": 4},
    {"double_buffer": True, "depth_size": 24},
]


def _as_list(data: Sequence[Any]) -> list[Any]:
    # numpy buffers become plain Python numbers before reaching ctypes.
    tolist = getattr(data, "tolist", None)
    return tolist() if tolist is not None else list(data)


def _open_window(pyglet: Any, gl: Any, *, width: int, height: int, title: str, mac_compat: bool) -> Any:
    candidates = (_MAC_CONFIGS if mac_compat else []) + _DEFAULT_CONFIGS
    for cfg in candidates:
        try:
            return pyglet.window.Window(
                width=width, height=height, caption=title, config=gl.Config(**cfg), resizable=True, vsync=True
            )
        except pyglet.window.NoSuchConfigException:
            continue
    return pyglet.window.Window(width=width, height=height, caption=title, resizable=True, vsync=True)


def run_pyglet(
    *,
    width: int,
    height: int,
    background_rgb: tuple[int, int, int],
    process_input: Callable[[PointerState], None],
    get_view: Callable[[], tuple[Vec3, Vec3, Vec3]],
    step_simulation: Callable[[], None],
    get_trail_data: Callable[[], tuple[Sequence[float], Sequence[int]]],
    on_key: Callable[[str], None],
    get_grid_data: Callable[[], tuple[list[float], list[int]]] | None = None,
    draw_overlay: Callable[[Any], None] | None = None,
    get_caption: Callable[[], str] | None = None,
    get_line_width: Callable[[], float] | None = None,
    target_fps: int,
    title: str,
    mac_compat: bool = False,
    fov: float = 45.0,
) -> None:
    try:
        import pyglet  # type: ignore
    except ImportError as e:  # pragma: no cover
        raise RuntimeError("Missing dependency: install pyglet (pip install pyglet).") from e

    from pyglet import gl  # type: ignore
    from pyglet.math import Mat4, Vec3 as GLVec3  # type: ignore
    from pyglet.window import key, mouse  # type: ignore

    if mac_compat:
        pyglet.options["shadow_window"] = False
        pyglet.options["vsync"] = True

    window = _open_window(pyglet, gl, width=width, height=height, title=title, mac_compat=mac_compat)

    r, g, b = background_rgb
    gl.glClearColor(r / 255.0, g / 255.0, b / 255.0, 1.0)
    gl.glEnable(gl.GL_BLEND)
    gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)

    line_program = pyglet.graphics.get_default_shader()
    pointer = PointerState()
    trail_list = None
    grid_list = None
    grid_key: tuple[int, int] | None = None
    line_width_range: tuple[float, float] | None = None

    def safe_line_width(width: float) -> float:
        nonlocal line_width_range
        if line_width_range is None:
            try:
                buf = (gl.GLfloat * 2)()
                gl.glGetFloatv(gl.GL_ALIASED_LINE_WIDTH_RANGE, buf)
                line_width_range = (float(buf[0]), float(buf[1]))
            except gl.GLException:
                line_width_range = (1.0, 1.0)
        min_w, max_w = line_width_range
        width = max(min_w, min(max_w, float(width)))
        return max(1.0, width)

    def apply_3d_camera() -> None:
        eye, target, up = get_view()
        aspect = window.width / max(1.0, float(window.height))
        window.projection = Mat4.perspective_projection(aspect=aspect, z_near=0.1, z_far=2000.0, fov=fov)
        window.view = Mat4.look_at(GLVec3(*eye), GLVec3(*target), GLVec3(*up))

    def apply_2d_overlay() -> None:
        window.projection = Mat4.orthogonal_projection(0, max(window.width, 1), 0, max(window.height, 1), -1, 1)
        window.view = Mat4()

    def draw_grid() -> None:
        nonlocal grid_list, grid_key
        if get_grid_data is None:
            return
        verts, colors = get_grid_data()
        key_ = (len(verts), hash(tuple(verts)))
        if grid_key != key_:
            if grid_list is not None:
                grid_list.delete()
                grid_list = None
            grid_key = key_
            count = len(verts) // 3
            if count:
                grid_list = line_program.vertex_list(
                    count,
                    gl.GL_LINES,
                    position=("f", verts),
                    colors=("Bn", colors),
                )
        if grid_list is not None:
            line_program.use()
            grid_list.draw(gl.GL_LINES)
            line_program.stop()

    def draw_trail() -> None:
        nonlocal trail_list
        # Opacity and hue of every segment shift each frame, so the list is rebuilt.
        if trail_list is not None:
            trail_list.delete()
            trail_list = None
        xyz, rgba = get_trail_data()
        count = len(xyz) // 3
        if count < 2:
            return
        trail_list = line_program.vertex_list(
            count,
            gl.GL_LINES,
            position=("f", _as_list(xyz)),
            colors=("Bn", _as_list(rgba)),
        )
        if get_line_width is not None:
            gl.glLineWidth(safe_line_width(get_line_width()))
        line_program.use()
        trail_list.draw(gl.GL_LINES)
        line_program.stop()
        gl.glLineWidth(1.0)

    @window.event
    def on_draw() -> None:
        window.clear()
        process_input(pointer)
        apply_3d_camera()
        step_simulation()
        draw_grid()
        draw_trail()
        if draw_overlay is not None:
            apply_2d_overlay()
            draw_overlay(window)
        pointer.end_frame()

    def set_pointer(x: int, y: int) -> None:
        # pyglet counts y from the bottom; the camera and panel expect top-left origin.
        pointer.x = float(x)
        pointer.y = float(window.height - y)

    @window.event
    def on_mouse_motion(x: int, y: int, dx: int, dy: int) -> None:  # noqa: ARG001
        set_pointer(x, y)

    @window.event
    def on_mouse_drag(x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int) -> None:  # noqa: ARG001
        set_pointer(x, y)

    @window.event
    def on_mouse_press(x: int, y: int, button: int, modifiers: int) -> None:  # noqa: ARG001
        set_pointer(x, y)
        if button == mouse.LEFT:
            pointer.left = True
        elif button == mouse.RIGHT:
            pointer.right = True

    @window.event
    def on_mouse_release(x: int, y: int, button: int, modifiers: int) -> None:  # noqa: ARG001
        set_pointer(x, y)
        if button == mouse.LEFT:
            pointer.left = False
        elif button == mouse.RIGHT:
            pointer.right = False

    @window.event
    def on_mouse_scroll(x: int, y: int, scroll_x: float, scroll_y: float) -> None:  # noqa: ARG001
        set_pointer(x, y)
        pointer.scroll_y += float(scroll_y)

    @window.event
    def on_key_press(symbol: int, modifiers: int) -> bool:  # noqa: ARG001
        mapping = {
            key.SPACE: "space",
            key.R: "r",
            key.P: "p",
            key.C: "c",
            key.ESCAPE: "esc",
        }
        k = mapping.get(symbol)
        if k is None:
            return False
        try:
            on_key(k)
        except SystemExit:
            window.close()
            pyglet.app.exit()
        # Handled here so pyglet's default Escape handler does not fire as well.
        return True

    @window.event
    def on_close() -> None:
        pyglet.app.exit()

    def update_caption(dt: float) -> None:  # noqa: ARG001
        window.set_caption(get_caption() if get_caption is not None else title)

    pyglet.clock.schedule_interval(update_caption, 0.25)
    pyglet.app.run(1.0 / max(10, target_fps))
