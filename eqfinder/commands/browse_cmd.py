"""Brand -> model -> variant browsing."""

from eqfinder.commands.common import load_database, print_entries
from eqfinder.constants import ExitCode
from eqfinder.search.engine import normalize_model_name


def _variants(engine, brand, model):
    groups = engine.group_by_model(engine.search_models_by_brand(brand, model))
    wanted = {normalize_model_name(model).lower(), normalize_model_name(f"{brand} {model}").lower()}
    exact = [e for name, group in groups.items() if name.lower() in wanted for e in group]
    return exact or [e for group in groups.values() for e in group]


def run(args):
    db = load_database(args)
    engine = db.search

    if args.brand and args.model:
        variants = _variants(engine, args.brand, args.model)
        if not variants:
            print(f"no variants for {args.brand} {args.model}")
            return ExitCode.NOT_FOUND
        print_entries(variants, db, show_paths=True)
        return ExitCode.OK

    if args.brand:
        models = engine.group_by_model(engine.search_models_by_brand(args.brand))
        if not models:
            print(f"no models for brand {args.brand!r}")
            return ExitCode.NOT_FOUND
        for model, variants in models.items():
            print(f"{model}  ({len(variants)} variants)")
        return ExitCode.OK

    if not args.query:
        print("error: give a brand query or --brand")
        return ExitCode.USAGE
    brands = engine.search_brands(args.query)
    if not brands:
        print(f"no brands matching {args.query!r}")
        return ExitCode.OK
    for brand in brands:
        print(brand)
    return ExitCode.OK
