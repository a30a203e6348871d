"""Directional, point and spot lights attached to game objects."""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from cronoscore.component import Component, ComponentType
from cronoscore.linalg import decompose


class LightType(Enum):
    NONE = -1
    DIRECTIONAL = 0
    POINTLIGHT = 1
    SPOTLIGHT = 2


@dataclass
class DirectionalLight:
    light_direction: np.ndarray = field(default_factory=lambda: np.zeros(4))
    light_color: np.ndarray = field(default_factory=lambda: np.zeros(4))
    light_intensity: float = 1.0


@dataclass
class PointLight:
    light_position: np.ndarray = field(default_factory=lambda: np.zeros(4))
    light_color: np.ndarray = field(default_factory=lambda: np.ones(4))
    light_intensity: float = 1.0
    light_att_k: float = 1.0
    light_att_l: float = 0.09
    light_att_q: float = 0.032


@dataclass
class SpotLight:
    light_position: np.ndarray = field(default_factory=lambda: np.zeros(4))
    light_color: np.ndarray = field(default_factory=lambda: np.ones(4))
    light_direction: np.ndarray = field(default_factory=lambda: np.zeros(4))
    light_intensity: float = 1.0
    light_att_k: float = 1.0
    light_att_l: float = 0.09
    light_att_q: float = 0.032
    inner_cutoff_angle_cos: float = math.cos(math.radians(12.5))
    outer_cutoff_angle_cos: float = math.cos(math.radians(45.0))


_UNIFORMS = {
    LightType.DIRECTIONAL: "u_DirLightsArray",
    LightType.POINTLIGHT: "u_PointLightsArray",
    LightType.SPOTLIGHT: "u_SPLightsArray",
}


def light_uniform(light_type: LightType) -> str:
    """Name of the shader array that holds lights of the given type."""
    name = _UNIFORMS.get(light_type)
    if name is None:
        warnings.warn(
            "couldn't convert light type into uniform string", RuntimeWarning, stacklevel=2
        )
        return ""
    return name


class LightRegistry:
    """Lists of the lights in a scene, one list per light type."""

    def __init__(self) -> None:
        self._lights: dict[LightType, list[LightComponent]] = {
            LightType.DIRECTIONAL: [],
            LightType.POINTLIGHT: [],
            LightType.SPOTLIGHT: [],
        }

    def lights_of(self, light_type: LightType) -> list["LightComponent"]:
        try:
            return self._lights[light_type]
        except KeyError:
            raise ValueError(f"no lights are kept for {light_type}") from None


def _component_of(owner: Any, component_type: ComponentType):
    for comp in getattr(owner, "components", ()):
        if comp.component_type is component_type:
            return comp
    return None


def _vec(v, size: int) -> np.ndarray:
    a = np.array(v, dtype=float)
    if a.shape != (size,):
        raise ValueError(f"expected {size} components, got shape {a.shape}")
    return a


class LightComponent(Component):
    """A light that follows its game object; starts as a point light."""

    TYPE = ComponentType.LIGHT

    def __init__(self, parent: Any, registry: LightRegistry | None = None) -> None:
        super().__init__(ComponentType.LIGHT, parent)
        self.registry = registry if registry is not None else LightRegistry()
        self.directional = DirectionalLight()
        self.point = PointLight()
        self.spot = SpotLight()
        self.change_light_type = False
        self.spotlight_inner_cutoff = 12.5
        self.spotlight_outer_cutoff = 45.0
        self._light_type = LightType.POINTLIGHT
        self.registry.lights_of(LightType.POINTLIGHT).append(self)

    @property
    def light_type(self) -> LightType:
        return self._light_type

    @property
    def light_color(self) -> np.ndarray:
        if self._light_type is LightType.POINTLIGHT:
            color = self.point.light_color
        elif self._light_type is LightType.SPOTLIGHT:
            color = self.spot.light_color
        else:
            color = self.directional.light_color
        return np.array(color[:3])

    @property
    def light_intensity(self) -> float:
        if self._light_type is LightType.POINTLIGHT:
            return self.point.light_intensity
        if self._light_type is LightType.SPOTLIGHT:
            return self.spot.light_intensity
        return self.directional.light_intensity

    @property
    def light_direction(self) -> np.ndarray:
        if self._light_type is LightType.POINTLIGHT:
            return np.zeros(3)
        if self._light_type is LightType.SPOTLIGHT:
            return np.array(self.spot.light_direction[:3])
        return np.array(self.directional.light_direction[:3])

    @property
    def light_attenuation_factors(self) -> np.ndarray:
        if self._light_type is LightType.POINTLIGHT:
            p = self.point
            return np.array([p.light_att_k, p.light_att_l, p.light_att_q])
        if self._light_type is LightType.SPOTLIGHT:
            s = self.spot
            return np.array([s.light_att_k, s.light_att_l, s.light_att_q])
        return np.zeros(3)

    def update(self, dt: float) -> None:
        """Take position and direction from the owner's global transform."""
        transform = _component_of(self.parent, ComponentType.TRANSFORM)
        if transform is None:
            raise ValueError("light owner has no transform component")
        parts = decompose(transform.global_matrix)
        w, x, y, z = parts.rotation
        orientation = np.array([
            2 * (x * z + w * y),
            2 * (y * z - w * x),
            1 - 2 * (x * x + y * y),
        ])
        position = np.append(parts.translation, 0.0)
        self.point.light_position = position.copy()
        self.spot.light_position = position.copy()
        self.spot.light_direction = np.append(-orientation, 0.0)
        self.spot.inner_cutoff_angle_cos = math.cos(math.radians(self.spotlight_inner_cutoff))
        self.spot.outer_cutoff_angle_cos = math.cos(math.radians(self.spotlight_outer_cutoff))

    def set_light_type(self, light_type: LightType) -> None:
        if light_type is self._light_type:
            return
        if self._light_type is not LightType.NONE:
            held = self.registry.lights_of(self._light_type)
            for i, light in enumerate(held):
                if light is self:
                    del held[i]
                    break
        if light_type is LightType.NONE:
            warnings.warn("invalid light type", RuntimeWarning, stacklevel=2)
        else:
            self.registry.lights_of(light_type).append(self)
        self._light_type = light_type
        self.change_light_type = True

    def set_light_direction(self, direction) -> None:
        d = np.append(_vec(direction, 3), 0.0)
        self.spot.light_direction = d.copy()
        self.directional.light_direction = d.copy()

    def set_light_color(self, color) -> None:
        """Set the colour of every light kind and of the owner's material."""
        c = np.append(_vec(color, 3), 1.0)
        self.point.light_color = c.copy()
        self.spot.light_color = c.copy()
        self.directional.light_color = c.copy()
        material = _component_of(self.parent, ComponentType.MATERIAL)
        if material is not None and hasattr(material, "set_color"):
            material.set_color(c.copy())

    def set_light_intensity(self, intensity: float) -> None:
        """Set the intensity; values outside [0, 1] are ignored."""
        if intensity < 0.0 or intensity > 1.0:
            return
        self.point.light_intensity = intensity
        self.spot.light_intensity = intensity
        self.directional.light_intensity = intensity

    def set_attenuation_factors(self, factors) -> None:
        """Set the constant, linear and quadratic attenuation of point and spot lights."""
        k, l, q = _vec(factors, 3)
        for light in (self.point, self.spot):
            light.light_att_k = float(k)
            light.light_att_l = float(l)
            light.light_att_q = float(q)