"""navplan command line.

Computes and prints the navigation log of a stored flight plan.

Typical usage:
    navplan --plan ~/.navplan/plan.json
    navplan --plan plan.json --wind EHRD=210/15 --wind EHAM=220/18G28
    navplan --plan plan.json --remote https://api.byteflight.app
"""

import argparse
import re
import sys
from pathlib import Path

from navplan.aircraft.registry import AircraftRegistry
from navplan.core.config import ConfigLoader
from navplan.core.logging_system import get_logger, initialize_logging, shutdown_logging
from navplan.core.resource_path import get_config_path
from navplan.navigation.flight_plan import FlightPlan
from navplan.planning.calculator import calculator_registry
from navplan.planning.navlog import NavigationLog, RouteLeg
from navplan.planning.orchestrator import NavLogOrchestrator, NavLogState
from navplan.planning.persistence import JsonFileFlightPlanStore
from navplan.planning.scheduler import InlineExecutor, ManualScheduler
from navplan.systems.weight_balance import WeightBalanceSystem
from navplan.weather.observation import InMemoryWeatherProvider, WeatherObservation

logger = get_logger(__name__)

DEFAULT_PLAN_PATH = Path("~/.navplan/plan.json")

_WIND_PATTERN = re.compile(r"^([A-Za-z0-9]{3,5})=(\d{1,3})/(\d{1,3})(?:G(\d{1,3}))?$")


def parse_wind(text: str) -> WeatherObservation:
    """Parse ``STATION=DIR/SPEED[Gnn]`` into an observation.

    Raises:
        argparse.ArgumentTypeError: If the text does not match.
    """
    match = _WIND_PATTERN.match(text.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid wind {text!r}, expected STATION=DIR/SPEED[Gnn]")
    station, direction, speed, gust = match.groups()
    return WeatherObservation(
        station_id=station.upper(),
        wind_direction=float(direction) % 360,
        wind_speed=float(speed),
        wind_gust=float(gust) if gust else None,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="navplan - VFR navigation log calculator")

    parser.add_argument(
        "--plan",
        type=Path,
        default=DEFAULT_PLAN_PATH,
        help="Flight plan JSON file (default: %(default)s; a default plan is used if missing)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings YAML overriding the built-in defaults",
    )
    parser.add_argument(
        "--aircraft",
        type=str,
        help="Registration of a fleet aircraft to fly the plan with (e.g. PH-XYZ)",
    )
    parser.add_argument(
        "--wind",
        type=parse_wind,
        action="append",
        default=[],
        help="Wind at a station, e.g. EHRD=210/15 or EHAM=220/18G28 (repeatable)",
    )
    parser.add_argument(
        "--remote",
        nargs="?",
        const="",
        metavar="URL",
        help="Compute with the flight plan service (configured URL if none given)",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write the plan back to --plan (creates the default plan on first use)",
    )

    return parser.parse_args(argv)


def _load_config(path: Path | None) -> ConfigLoader:
    if path is None:
        default = get_config_path("navplan.yaml")
        path = default if default.exists() else None
    return ConfigLoader.load_with_defaults(path)


def _load_fleet() -> AircraftRegistry:
    fleet = get_config_path("fleet.yaml")
    return AircraftRegistry.load_from_yaml(fleet) if fleet.exists() else AircraftRegistry()


def _format_time(minutes: float) -> str:
    total = round(minutes)
    return f"{total // 60}:{total % 60:02d}"


def _format_leg(leg: RouteLeg) -> str:
    p = leg.performance
    wind = f"{leg.wind.direction:03.0f}/{leg.wind.speed:02.0f}" if leg.wind else "  calm"
    altitude = f"{leg.altitude_ft:5.0f}" if leg.altitude_ft is not None else "    -"
    if p is None:
        return f"{leg.start.identifier:>6} {leg.end.identifier:>6} {altitude} {leg.course.distance_nm:6.1f}"
    flag = " *" if p.degraded else ""
    return (
        f"{leg.start.identifier:>6} {leg.end.identifier:>6} {altitude} {leg.course.distance_nm:6.1f} "
        f"{leg.course.true_track:5.0f} {leg.course.magnetic_track:5.0f} {wind} {p.magnetic_heading:5.0f} "
        f"{p.groundspeed:5.0f} {_format_time(p.duration_min):>6} {p.fuel or 0.0:6.1f}{flag}"
    )


def format_navigation_log(log: NavigationLog) -> str:
    """Render a navigation log as a fixed-width table."""
    lines = [
        f"{'FROM':>6} {'TO':>6} {'ALT':>5} {'DIST':>6} {'TT':>5} {'MT':>5} {'WIND':>6} {'MH':>5} "
        f"{'GS':>5} {'TIME':>6} {'FUEL':>6}",
    ]
    lines.extend(_format_leg(leg) for leg in log.legs)
    lines.append(
        f"{'TOTAL':>6} {'':>6} {'':>5} {log.total_distance_nm:6.1f} {'':>5} {'':>5} {'':>6} {'':>5} "
        f"{'':>5} {_format_time(log.total_duration_min):>6} {log.total_trip_fuel or 0.0:6.1f}"
    )
    if log.alternate_leg:
        lines.append("ALTERNATE")
        lines.append(_format_leg(log.alternate_leg))
    if log.fuel:
        f = log.fuel
        lines.append("")
        lines.append(f"FUEL ({f.policy.value}, {f.reserve_minutes:.0f} min reserve)")
        for label, value in (("Trip", f.trip), ("Contingency", f.contingency), ("Reserve", f.reserve),
                             ("Taxi", f.taxi), ("Alternate", f.alternate), ("Total", f.total)):
            lines.append(f"  {label:<12}{value:7.1f} L")
    if log.departure_time or log.arrival_time:
        lines.append("")
        lines.append(f"ETD {log.departure_time or '-'}  ETA {log.arrival_time or '-'}")
    for warning in log.warnings:
        lines.append(f"WARNING: {warning}")
    return "\n".join(lines)


def _print_checks(plan: FlightPlan, log: NavigationLog, config: ConfigLoader) -> None:
    for message in plan.validate(
        min_altitude_ft=float(config.get("plan.min_altitude_ft", 0.0)),
        max_altitude_ft=float(config.get("plan.max_altitude_ft", 19500.0)),
        arrival_time=log.arrival_time,
    ):
        print(f"CHECK: {message}")

    if log.fuel and not log.fuel.is_sufficient(plan.payload.fuel):
        print(f"CHECK: Fuel on board {plan.payload.fuel:.1f} L below required {log.fuel.total:.1f} L")

    wb = WeightBalanceSystem(plan.aircraft, plan.payload,
                             fuel_density=float(config.get("fuel.density_kg_per_l", 0.72)))
    for label, report in (("Takeoff", wb.takeoff_report()),
                          ("Landing", wb.landing_report(log.total_trip_fuel or 0.0))):
        print(f"{label}: {report.total_weight:.0f} kg, CG {report.cg:.3f} - {report.message}")


def run(args: argparse.Namespace) -> int:
    """Compute and print the navigation log.

    Returns:
        0 when a log was computed, 2 when the computation failed.
    """
    config = _load_config(args.config)
    store = JsonFileFlightPlanStore(args.plan)
    plan = store.load()

    if args.aircraft:
        aircraft = _load_fleet().get(args.aircraft)
        if aircraft is None:
            print(f"Unknown aircraft: {args.aircraft}", file=sys.stderr)
            return 2
        plan = plan.with_aircraft(aircraft)

    registry = calculator_registry()
    if args.remote is not None:
        calculator = registry.create("remote", config, base_url=args.remote or None)
    else:
        calculator = registry.create("local", config, weather=InMemoryWeatherProvider(args.wind))

    orchestrator = NavLogOrchestrator(
        calculator,
        ManualScheduler(),
        executor=InlineExecutor(),
        store=store if args.save else None,
        debounce_s=float(config.get("orchestration.debounce_s", 0.5)),
    )
    orchestrator.update_plan(plan, persist=args.save)
    orchestrator.refresh()
    snapshot = orchestrator.snapshot()
    orchestrator.close()

    print(f"{plan.route_string()}  {plan.aircraft.id} {plan.aircraft.name}  {plan.cruise_altitude_ft:.0f} ft")
    if snapshot.state is not NavLogState.READY or snapshot.log is None:
        print(f"Error: {snapshot.error}", file=sys.stderr)
        return 2

    print(format_navigation_log(snapshot.log))
    print()
    _print_checks(plan, snapshot.log, config)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    logging_config = get_config_path("logging.yaml")
    if logging_config.exists():
        initialize_logging(str(logging_config), use_platform_dir=True)
    else:
        initialize_logging(use_platform_dir=True)

    try:
        return run(args)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
