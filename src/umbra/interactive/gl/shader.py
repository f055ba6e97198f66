# どこで: `src/umbra/interactive/gl/shader.py`。
# 何を: GLSurface が使う 3 つのシェーダ（放射グラデーション / winding 加算 / カバー塗り）を生成する。
# なぜ: GLSL ソースを 1 箇所に集約し、描画ロジックから切り離すため。

from __future__ import annotations

from typing import Any

MAX_GRADIENT_STOPS = 8

_VERTEX = """
#version 410
uniform mat4 projection;
in vec2 in_pos;
out vec2 v_pos;
void main() {
    v_pos = in_pos;
    gl_Position = projection * vec4(in_pos, 0.0, 1.0);
}
"""

# 中心からの距離 / 半径 を t とし、stop 間を線形補間する。半径より外側は最後の stop。
_GRADIENT_FRAGMENT = f"""
#version 410
#define MAX_STOPS {MAX_GRADIENT_STOPS}
uniform vec2 u_center;
uniform float u_radius;
uniform int u_count;
uniform float u_offsets[MAX_STOPS];
uniform vec3 u_colors[MAX_STOPS];
in vec2 v_pos;
out vec4 f_color;
void main() {{
    float t = clamp(length(v_pos - u_center) / max(u_radius, 1e-6), 0.0, 1.0);
    vec3 color = u_colors[0];
    for (int i = 1; i < MAX_STOPS; ++i) {{
        if (i >= u_count) break;
        float o0 = u_offsets[i - 1];
        float o1 = u_offsets[i];
        if (t >= o0) {{
            float span = o1 - o0;
            float u = span > 0.0 ? clamp((t - o0) / span, 0.0, 1.0) : 1.0;
            color = mix(u_colors[i - 1], u_colors[i], u);
        }}
    }}
    f_color = vec4(color, 1.0);
}}
"""

# 表向きの三角形は +1、裏向きは -1 を加算ブレンドで積む。
_WINDING_FRAGMENT = """
#version 410
in vec2 v_pos;
out float f_winding;
void main() {
    f_winding = gl_FrontFacing ? 1.0 : -1.0;
}
"""

# winding の絶対値が 0.5 以上（non-zero）の画素だけを塗る。
_COVER_FRAGMENT = """
#version 410
uniform sampler2D u_winding;
uniform vec4 color;
in vec2 v_pos;
out vec4 f_color;
void main() {
    float w = texelFetch(u_winding, ivec2(gl_FragCoord.xy), 0).r;
    if (abs(w) < 0.5) discard;
    f_color = color;
}
"""


class Shader:
    """シェーダプログラム生成のまとめ。"""

    @staticmethod
    def create_gradient_shader(ctx: Any) -> Any:
        return ctx.program(vertex_shader=_VERTEX, fragment_shader=_GRADIENT_FRAGMENT)

    @staticmethod
    def create_winding_shader(ctx: Any) -> Any:
        return ctx.program(vertex_shader=_VERTEX, fragment_shader=_WINDING_FRAGMENT)

    @staticmethod
    def create_cover_shader(ctx: Any) -> Any:
        return ctx.program(vertex_shader=_VERTEX, fragment_shader=_COVER_FRAGMENT)


__all__ = ["MAX_GRADIENT_STOPS", "Shader"]
