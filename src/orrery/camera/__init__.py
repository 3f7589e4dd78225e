"""Camera module for primary ray generation.

Components:
    pinhole: Forward-looking perspective camera, one ray per pixel center

pinhole declares Taichi fields; import it directly after ti.init():
    from orrery.camera.pinhole import PinholeCamera, setup_camera
"""
