"""
どこで: `src/polychime/interactive/gl/shader.py`。
何を: 輪郭線（太さ付き LINE_STRIP）と塗りマーカー用の GLSL プログラムを生成する。
なぜ: シェーダソースを renderer から分離し、uniform 名（projection / line_thickness / color）を一箇所で管理するため。
"""

from __future__ import annotations

from typing import Any

_LINE_VERTEX = """
#version 410
in vec2 in_vert;
void main() {
    gl_Position = vec4(in_vert, 0.0, 1.0);
}
"""

# 線分 1 本をワールド座標で太さ line_thickness の四角形へ展開する。
_LINE_GEOMETRY = """
#version 410
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
uniform mat4 projection;
uniform float line_thickness;
void main() {
    vec2 p0 = gl_in[0].gl_Position.xy;
    vec2 p1 = gl_in[1].gl_Position.xy;
    vec2 dir = p1 - p0;
    float len = length(dir);
    if (len <= 0.0) {
        return;
    }
    vec2 offset = vec2(-dir.y, dir.x) / len * (line_thickness * 0.5);
    gl_Position = projection * vec4(p0 + offset, 0.0, 1.0);
    EmitVertex();
    gl_Position = projection * vec4(p0 - offset, 0.0, 1.0);
    EmitVertex();
    gl_Position = projection * vec4(p1 + offset, 0.0, 1.0);
    EmitVertex();
    gl_Position = projection * vec4(p1 - offset, 0.0, 1.0);
    EmitVertex();
    EndPrimitive();
}
"""

_LINE_FRAGMENT = """
#version 410
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""

_FILL_VERTEX = """
#version 410
uniform mat4 projection;
in vec2 in_vert;
in vec3 in_color;
out vec3 v_color;
void main() {
    v_color = in_color;
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
}
"""

_FILL_FRAGMENT = """
#version 410
in vec3 v_color;
out vec4 frag_color;
void main() {
    frag_color = vec4(v_color, 1.0);
}
"""


class Shader:
    """ModernGL プログラム生成のファクトリ。"""

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """輪郭線用プログラム（vertex + geometry + fragment）を返す。"""
        return ctx.program(
            vertex_shader=_LINE_VERTEX,
            geometry_shader=_LINE_GEOMETRY,
            fragment_shader=_LINE_FRAGMENT,
        )

    @staticmethod
    def create_fill_shader(ctx: Any) -> Any:
        """頂点色付き三角形（マーカー）用プログラムを返す。"""
        return ctx.program(vertex_shader=_FILL_VERTEX, fragment_shader=_FILL_FRAGMENT)
