import time
import dearpygui.dearpygui as dpg


def _make_callbacks(shared):
    def gravity_cb(sender, app_data, user_data):
        try:
            shared['gravity_y'] = float(app_data)
        except Exception:
            pass
    def damping_cb(sender, app_data, user_data):
        try:
            shared['damping'] = float(app_data)
        except Exception:
            pass
    def iters_cb(sender, app_data, user_data):
        shared['constraint_iterations'] = int(app_data)
    def tear_cb(sender, app_data, user_data):
        try:
            value = float(app_data)
            # a factor of 1 or less would tear links that are at rest
            if value <= 1.0:
                value = 0.0
                dpg.set_value(sender, value)
            shared['tear_factor'] = value
        except Exception:
            pass
    def pause_cb():
        shared['toggle_pause'] = True
    def reset_cb():
        shared['reset_cloth'] = True
    def exit_cb():
        shared['__exit__'] = True
    return gravity_cb, damping_cb, iters_cb, tear_cb, pause_cb, reset_cb, exit_cb


def run_gui(shared):
    """
    Run DearPyGui in its own process. Writes values into `shared` dict;
    the pygame loop applies them to its cloth between frames.
    """
    dpg.create_context()

    gravity_cb, damping_cb, iters_cb, tear_cb, pause_cb, reset_cb, exit_cb = _make_callbacks(shared)

    with dpg.window(label="Cloth Controls", tag="controls_window", width=380, height=360):
        dpg.add_text("Physics")
        dpg.add_spacer()
        dpg.add_text("Gravity (units/s^2)")
        dpg.add_slider_float(label="Gravity", tag="gravity_slider", default_value=float(shared.get('gravity_y', 987.0)),
                             min_value=0.0, max_value=3000.0, callback=gravity_cb)
        dpg.add_text("Velocity damping")
        dpg.add_slider_float(label="Damping", tag="damping_slider", default_value=float(shared.get('damping', 0.99)),
                             min_value=0.8, max_value=1.0, callback=damping_cb)
        dpg.add_text("Constraint iterations")
        dpg.add_slider_int(label="Iterations", tag="iters_slider", default_value=int(shared.get('constraint_iterations', 2)),
                           min_value=1, max_value=20, callback=iters_cb)
        dpg.add_text("Tear factor (<= 1 disables tearing)")
        dpg.add_slider_float(label="Tear", tag="tear_slider", default_value=float(shared.get('tear_factor', 0.0)),
                             min_value=0.0, max_value=5.0, callback=tear_cb)
        dpg.add_separator()
        dpg.add_button(label="Pause / Toggle", callback=lambda s, a, u: pause_cb())
        dpg.add_button(label="Reset Cloth", callback=lambda s, a, u: reset_cb())
        dpg.add_button(label="Exit GUI", callback=lambda s, a, u: exit_cb())
        dpg.add_spacer()
        dpg.add_text("Status:", tag="status_label")
        dpg.add_text("", tag="status_text")

    dpg.create_viewport(title='Cloth Controls', width=400, height=400)
    dpg.set_primary_window("controls_window", True)
    dpg.setup_dearpygui()
    dpg.show_viewport()

    try:
        while not shared.get('__exit__', False) and dpg.is_dearpygui_running():
            try:
                status = (f"particles={shared.get('particle_count', 0)}, "
                          f"constraints={shared.get('constraint_count', 0)}, "
                          f"iters={shared.get('constraint_iterations', 2)}")
            except Exception:
                status = "status error"
            dpg.set_value("status_text", status)
            dpg.render_dearpygui_frame()
            time.sleep(0.01)
    finally:
        dpg.destroy_context()


if __name__ == "__main__":
    from multiprocessing import Manager
    mgr = Manager()
    shared = mgr.dict()
    shared['gravity_y'] = 987.0
    shared['damping'] = 0.99
    shared['constraint_iterations'] = 2
    run_gui(shared)
