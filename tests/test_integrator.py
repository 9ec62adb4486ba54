"""Tests for the fixed-step integrators."""

import math

import pytest

from lotka_lab.config.schemas import (
    EXTINCTION_FLOOR,
    CompetitionParameters,
    ModelKind,
    PredatorPreyParameters,
)
from lotka_lab.diagnostics import conserved_quantity, drift_percent
from lotka_lab.dynamics import create_model
from lotka_lab.errors import InvalidParameter
from lotka_lab.simulation import (
    EulerIntegrator,
    RK4Integrator,
    State,
    create_integrator,
)


def reference_rk4(f, n1, n2, h):
    k1 = f(n1, n2)
    k2 = f(n1 + k1[0] * h / 2, n2 + k1[1] * h / 2)
    k3 = f(n1 + k2[0] * h / 2, n2 + k2[1] * h / 2)
    k4 = f(n1 + k3[0] * h, n2 + k3[1] * h)
    return (
        n1 + h / 6 * (k1[0] + 2 * k2[0] + 2 * k3[0] + k4[0]),
        n2 + h / 6 * (k1[1] + 2 * k2[1] + 2 * k3[1] + k4[1]),
    )


def test_rk4_step_matches_reference_competition():
    p = CompetitionParameters()

    def f(n1, n2):
        return (
            p.r1 * n1 * (1 - (n1 + p.a12 * n2) / p.K1),
            p.r2 * n2 * (1 - (n2 + p.a21 * n1) / p.K2),
        )

    expected = reference_rk4(f, 50.0, 40.0, 0.05)
    result = RK4Integrator().step(State(50.0, 40.0), p, ModelKind.COMPETITION, 0.05)

    assert result.n1 == pytest.approx(expected[0], rel=1e-12)
    assert result.n2 == pytest.approx(expected[1], rel=1e-12)


def test_rk4_step_matches_reference_predator_prey():
    p = PredatorPreyParameters()

    def f(n1, n2):
        return (p.r1 * n1 - p.a * n1 * n2, -p.r2 * n2 + p.b * n1 * n2)

    expected = reference_rk4(f, 40.0, 9.0, 0.05)
    result = RK4Integrator().step(State(40.0, 9.0), p, "predator_prey", 0.05)

    assert result.n1 == pytest.approx(expected[0], rel=1e-12)
    assert result.n2 == pytest.approx(expected[1], rel=1e-12)


def test_step_accepts_model_instance():
    p = PredatorPreyParameters()
    integrator = RK4Integrator()
    by_kind = integrator.step(State(40.0, 9.0), p, ModelKind.PREDATOR_PREY, 0.05)
    by_model = integrator.step(State(40.0, 9.0), p, create_model("predator_prey"), 0.05)
    assert by_kind == by_model


def test_step_is_deterministic():
    p = PredatorPreyParameters()
    runs = []
    for _ in range(2):
        integrator = RK4Integrator()
        state = State(40.0, 9.0)
        trajectory = []
        for _ in range(500):
            state = integrator.step(state, p, ModelKind.PREDATOR_PREY, 0.05)
            trajectory.append(state)
        runs.append(trajectory)

    assert runs[0] == runs[1]


@pytest.mark.parametrize(
    "params, h",
    [
        (PredatorPreyParameters(r1=8.0, r2=5.0, a=50.0, b=20.0, N1_0=100.0, N2_0=100.0), 1.0),
        (PredatorPreyParameters(r1=0.01, r2=9.0, a=3.0, b=0.001, N1_0=0.5, N2_0=200.0), 0.5),
        (CompetitionParameters(r1=9.0, r2=9.0, K1=5.0, K2=5.0, a12=4.0, a21=4.0, N1_0=300.0, N2_0=1.0), 2.0),
    ],
)
def test_populations_never_fall_below_floor(params, h):
    integrator = RK4Integrator()
    state = State(*params.initial_state())
    for _ in range(300):
        state = integrator.step(state, params, params.kind, h)
        for n in state:
            assert not math.isnan(n)
            assert n >= EXTINCTION_FLOOR


def test_floor_applied_to_collapsing_population():
    # one Euler step with a huge attack rate overshoots the prey below zero
    p = PredatorPreyParameters(a=1000.0)
    state = EulerIntegrator().step(State(40.0, 9.0), p, ModelKind.PREDATOR_PREY, 0.5)
    assert state.n1 == EXTINCTION_FLOOR


def test_custom_extinction_floor():
    p = PredatorPreyParameters(a=1000.0)
    state = EulerIntegrator(extinction_floor=1e-3).step(State(40.0, 9.0), p, ModelKind.PREDATOR_PREY, 0.5)
    assert state.n1 == 1e-3


def test_euler_drifts_more_than_rk4():
    p = PredatorPreyParameters()
    h0 = conserved_quantity((40.0, 9.0), p)

    drifts = {}
    for integrator in (RK4Integrator(), EulerIntegrator()):
        state = State(40.0, 9.0)
        for _ in range(1000):
            state = integrator.step(state, p, ModelKind.PREDATOR_PREY, 0.05)
        drifts[integrator.name] = abs(drift_percent(h0, conserved_quantity(state, p)))

    print(f"H drift after 1000 steps: {drifts}")
    assert drifts["rk4"] < 1.0
    assert drifts["euler"] > 10 * drifts["rk4"]


def test_create_integrator():
    assert isinstance(create_integrator("rk4"), RK4Integrator)
    assert isinstance(create_integrator("RK4"), RK4Integrator)
    assert isinstance(create_integrator("euler"), EulerIntegrator)
    assert create_integrator("rk4", extinction_floor=1e-6).extinction_floor == 1e-6

    with pytest.raises(ValueError, match="Unknown integrator type"):
        create_integrator("dopri5")


def test_step_rejects_parameters_of_other_model():
    with pytest.raises(InvalidParameter):
        RK4Integrator().step(State(1.0, 1.0), CompetitionParameters(), ModelKind.PREDATOR_PREY, 0.05)
