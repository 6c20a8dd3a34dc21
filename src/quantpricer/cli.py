import argparse
import json
import sys

from .config import ServiceConfig
from .core import CALL, PUT
from .log import configure_logging
from .service import InvalidArgumentError, QuantService, option_from_request
from .validation import cross_validate


def _kind(s: str):
    s = s.lower()
    if s in {"call", "c"}:
        return CALL
    if s in {"put", "p"}:
        return PUT
    raise argparse.ArgumentTypeError("kind must be 'call' or 'put'")


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--spot", type=float, required=True)
    parser.add_argument("--strike", type=float, required=True)
    parser.add_argument("--T", type=float, required=True, help="years")
    parser.add_argument("--rate", type=float, required=True, help="cont. risk-free")
    parser.add_argument("--vol", type=float, default=0.0, help="volatility")
    parser.add_argument("--q", type=float, default=0.0, help="cont. dividend yield")
    parser.add_argument("--kind", type=_kind, default=CALL, help="call|put")
    parser.add_argument("--json", action="store_true", help="print JSON")


def _request(args) -> dict:
    return {
        "option": {
            "spot": args.spot,
            "strike": args.strike,
            "rate": args.rate,
            "volatility": args.vol,
            "time_to_maturity": args.T,
            "dividend": args.q,
            "is_call": args.kind == CALL,
        }
    }


def _emit(args, result: dict):
    if args.json:
        print(json.dumps(result, sort_keys=True))
        return
    for key, value in result.items():
        if isinstance(value, float):
            print(f"{key:<20} {value:.10f}")
        else:
            print(f"{key:<20} {value}")


def cmd_price(service, args):
    return service.price(_request(args))


def cmd_greeks(service, args):
    return service.greeks(_request(args))


def cmd_iv(service, args):
    req = _request(args)
    req.update(target_price=args.target, lower_bound=args.lower,
               upper_bound=args.upper, tolerance=args.tol,
               max_iterations=args.max_iter)
    return service.implied_vol(req)


def cmd_mc(service, args):
    req = _request(args)
    req.update(paths=args.paths, seed=args.seed)
    return service.monte_carlo(req)


def cmd_validate(service, args):
    opt = option_from_request(_request(args), service.config.epsilon)
    paths = args.paths or service.config.default_paths
    return cross_validate(opt, paths=paths, seed=args.seed)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="quantpricer", description="Black-Scholes pricing CLI")
    p.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_px = sub.add_parser("price", help="Black-Scholes price")
    add_common(p_px)
    p_px.set_defaults(func=cmd_price)

    p_gk = sub.add_parser("greeks", help="price and Greeks")
    add_common(p_gk)
    p_gk.set_defaults(func=cmd_greeks)

    p_iv = sub.add_parser("iv", help="implied volatility from a price")
    add_common(p_iv)
    p_iv.add_argument("--target", type=float, required=True, help="observed price")
    p_iv.add_argument("--lower", type=float, default=None)
    p_iv.add_argument("--upper", type=float, default=None)
    p_iv.add_argument("--tol", type=float, default=None)
    p_iv.add_argument("--max-iter", dest="max_iter", type=int, default=None)
    p_iv.set_defaults(func=cmd_iv)

    p_mc = sub.add_parser("mc", help="Monte Carlo price (GBM terminal)")
    add_common(p_mc)
    p_mc.add_argument("--paths", type=int, default=0, help="0 = configured default")
    p_mc.add_argument("--seed", type=int, default=0)
    p_mc.set_defaults(func=cmd_mc)

    p_val = sub.add_parser("validate", help="Monte Carlo vs analytic")
    add_common(p_val)
    p_val.add_argument("--paths", type=int, default=100_000)
    p_val.add_argument("--seed", type=int, default=42)
    p_val.set_defaults(func=cmd_validate)

    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = ServiceConfig.from_env()
        configure_logging(args.log_level or config.log_level)
        result = args.func(QuantService(config), args)
    except ValueError as exc:
        code = getattr(exc, "code", InvalidArgumentError.code)
        print(f"{code}: {exc}", file=sys.stderr)
        return 2
    _emit(args, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
