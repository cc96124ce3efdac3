from __future__ import annotations

import ctypes

import numpy as np
from OpenGL.GL.shaders import compileProgram, compileShader
from OpenGL.GL import (
    GL_ARRAY_BUFFER,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_DYNAMIC_DRAW,
    GL_ELEMENT_ARRAY_BUFFER,
    GL_FALSE,
    GL_FLOAT,
    GL_FRAGMENT_SHADER,
    GL_LESS,
    GL_LINEAR,
    GL_RGBA,
    GL_STATIC_DRAW,
    GL_TEXTURE0,
    GL_TEXTURE_2D,
    GL_TEXTURE_MAG_FILTER,
    GL_TEXTURE_MIN_FILTER,
    GL_TRIANGLES,
    GL_UNSIGNED_BYTE,
    GL_UNSIGNED_SHORT,
    GL_VERTEX_SHADER,
    glActiveTexture,
    glBindBuffer,
    glBindTexture,
    glBufferData,
    glBufferSubData,
    glClear,
    glClearColor,
    glDepthFunc,
    glDisableVertexAttribArray,
    glDrawElementsInstanced,
    glEnable,
    glEnableVertexAttribArray,
    glGenBuffers,
    glGenTextures,
    glGetAttribLocation,
    glGetUniformLocation,
    glTexImage2D,
    glTexParameteri,
    glUniform1i,
    glUniformMatrix4fv,
    glUseProgram,
    glVertexAttribDivisor,
    glVertexAttribPointer,
    glViewport,
)

from . import config
from .frame import ViewProjSnapshot
from .scene import CUBE_INDICES, CUBE_VERTICES

_VERT_SRC = """
#version 120
attribute vec3 aPosition;
attribute vec2 aTexCoord;
attribute mat4 aModel;
uniform mat4 uViewProj;
varying vec2 vTexCoord;
void main() {
    vTexCoord = aTexCoord;
    gl_Position = uViewProj * aModel * vec4(aPosition, 1.0);
}
"""

_FRAG_SRC = """
#version 120
uniform sampler2D uDiffuse;
varying vec2 vTexCoord;
void main() {
    gl_FragColor = texture2D(uDiffuse, vTexCoord);
}
"""

_FLOAT = 4
_MAT4_BYTES = 16 * _FLOAT


class Renderer:
    """Textured cube, drawn once per instance with a shared camera uniform."""

    def __init__(self, texture: tuple[int, int, bytes], max_instances: int = 16) -> None:
        self._prog = compileProgram(
            compileShader(_VERT_SRC, GL_VERTEX_SHADER),
            compileShader(_FRAG_SRC, GL_FRAGMENT_SHADER),
        )
        self._loc_pos = glGetAttribLocation(self._prog, "aPosition")
        self._loc_uv = glGetAttribLocation(self._prog, "aTexCoord")
        self._loc_model = glGetAttribLocation(self._prog, "aModel")
        self._loc_view_proj = glGetUniformLocation(self._prog, "uViewProj")
        self._loc_diffuse = glGetUniformLocation(self._prog, "uDiffuse")

        self._vbo = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self._vbo)
        glBufferData(GL_ARRAY_BUFFER, CUBE_VERTICES.nbytes, CUBE_VERTICES, GL_STATIC_DRAW)

        self._ibo = glGenBuffers(1)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self._ibo)
        glBufferData(GL_ELEMENT_ARRAY_BUFFER, CUBE_INDICES.nbytes, CUBE_INDICES, GL_STATIC_DRAW)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)

        self._max_instances = max_instances
        self._instance_count = 0
        self._instance_vbo = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self._instance_vbo)
        glBufferData(GL_ARRAY_BUFFER, max_instances * _MAT4_BYTES, None, GL_DYNAMIC_DRAW)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        self._tex = self._upload_texture(*texture)

        glUseProgram(self._prog)
        glUniformMatrix4fv(self._loc_view_proj, 1, GL_FALSE, np.identity(4, dtype=np.float32))
        glUniform1i(self._loc_diffuse, 0)
        glUseProgram(0)

        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LESS)

    @staticmethod
    def _upload_texture(width: int, height: int, pixels: bytes) -> int:
        tex = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, tex)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, width, height, 0, GL_RGBA, GL_UNSIGNED_BYTE, pixels)
        glBindTexture(GL_TEXTURE_2D, 0)
        return tex

    def resize(self, width: int, height: int) -> None:
        glViewport(0, 0, max(0, width), max(0, height))

    def upload_camera(self, snap: ViewProjSnapshot) -> None:
        # Snapshot is already column-major, so no transpose.
        glUseProgram(self._prog)
        glUniformMatrix4fv(self._loc_view_proj, 1, GL_FALSE, snap.values)
        glUseProgram(0)

    def upload_instances(self, models: np.ndarray) -> None:
        data = np.ascontiguousarray(models[: self._max_instances], dtype=np.float32)
        self._instance_count = len(data)
        glBindBuffer(GL_ARRAY_BUFFER, self._instance_vbo)
        glBufferSubData(GL_ARRAY_BUFFER, 0, data.nbytes, data)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

    def draw(self) -> None:
        r, g, b = [c / 255.0 for c in config.CLEAR_COLOR]
        glClearColor(r, g, b, 1.0)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        if self._instance_count == 0:
            return

        glUseProgram(self._prog)
        glActiveTexture(GL_TEXTURE0)
        glBindTexture(GL_TEXTURE_2D, self._tex)

        stride = CUBE_VERTICES.shape[1] * _FLOAT
        glBindBuffer(GL_ARRAY_BUFFER, self._vbo)
        glEnableVertexAttribArray(self._loc_pos)
        glVertexAttribPointer(self._loc_pos, 3, GL_FLOAT, False, stride, ctypes.c_void_p(0))
        glEnableVertexAttribArray(self._loc_uv)
        glVertexAttribPointer(self._loc_uv, 2, GL_FLOAT, False, stride, ctypes.c_void_p(3 * _FLOAT))

        # A mat4 attribute takes four consecutive vec4 slots, one per column.
        model_locs = [self._loc_model + i for i in range(4)]
        glBindBuffer(GL_ARRAY_BUFFER, self._instance_vbo)
        for i, loc in enumerate(model_locs):
            glEnableVertexAttribArray(loc)
            glVertexAttribPointer(loc, 4, GL_FLOAT, False, _MAT4_BYTES, ctypes.c_void_p(i * 4 * _FLOAT))
            glVertexAttribDivisor(loc, 1)

        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self._ibo)
        glDrawElementsInstanced(
            GL_TRIANGLES, len(CUBE_INDICES), GL_UNSIGNED_SHORT, ctypes.c_void_p(0), self._instance_count
        )

        for loc in model_locs:
            glVertexAttribDivisor(loc, 0)
            glDisableVertexAttribArray(loc)
        glDisableVertexAttribArray(self._loc_uv)
        glDisableVertexAttribArray(self._loc_pos)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, 0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        glBindTexture(GL_TEXTURE_2D, 0)
        glUseProgram(0)
