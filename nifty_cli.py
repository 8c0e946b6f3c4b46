#!/usr/bin/env python3

import argparse
import os
import sys
from niftylib.core import deployment
from niftylib.core import utils
from niftylib.core.errors import NiftyError
from niftylib.core.project import NiftyProject

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="Nifty collection generator")
	subparsers = parser.add_subparsers(dest='command', required=True)

	generate = subparsers.add_parser('generate',
		help='generate the token media and metadata from a catalog')
	generate.add_argument('source',
		help='source directory containing the catalog file')
	generate.add_argument('-c', '--config', dest='config', default='config.yaml',
		help='catalog file name inside the source directory')
	generate.add_argument('-o', '--output', dest='output', default='output',
		help='output directory name')
	generate.add_argument('--media', dest='media', default='media',
		help='output directory name for the token media')
	generate.add_argument('--metadata', dest='metadata', default='metadata',
		help='output directory name for the token metadata')
	generate.add_argument('-s', '--seed', dest='seed', type=int,
		help='seed the sampler for a reproducible run')
	generate.add_argument('--strict-weights', dest='strict_weights',
		action='store_true', help='require option weights within (0, 1]')
	generate.add_argument('-f', '--force', dest='force', action='store_true',
		help='clear an existing output directory without asking')
	generate.add_argument('-n', '--dry-run', dest='dry_run', action='store_true',
		help='validate and sample only, do not write anything')
	_add_common_args(generate)

	deploy = subparsers.add_parser('deploy',
		help='point metadata media urls at the deployed media')
	deploy.add_argument('source',
		help='source directory containing the output directory')
	deploy.add_argument('--base-uri', dest='base_uri', required=True,
		help='base uri of the deployed media, ending with /')
	deploy.add_argument('-o', '--output', dest='output', default='output',
		help='output directory name')
	deploy.add_argument('--metadata', dest='metadata', default='metadata',
		help='output directory name for the token metadata')
	_add_common_args(deploy)

	args = parser.parse_args(argv)
	return args

#============================================

def _add_common_args(parser) -> None:
	parser.add_argument('-v', '--verbose', dest='verbosity', action='count',
		default=1, help='increase logging verbosity')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='only log warnings and hide the progress bar')

#============================================

def confirm_clear(output_dir: str) -> bool:
	if not os.path.isdir(output_dir):
		return False
	try:
		answer = input(
			f"output directory '{output_dir}' already exists and needs to be cleared, "
			"continue? [y/N] "
		)
	except EOFError:
		# closed or empty stdin counts as declining
		return False
	return answer.strip().lower() in ('y', 'yes')

#============================================

def run_generate(args) -> None:
	clear_output = args.force
	if not clear_output and not args.dry_run:
		clear_output = confirm_clear(os.path.join(args.source, args.output))
	project = NiftyProject(args.source, config_file=args.config,
		output_dir=args.output, media=args.media, metadata=args.metadata,
		seed=args.seed, strict_weights=args.strict_weights,
		clear_output=clear_output, dry_run=args.dry_run)
	project.run()

#============================================

def run_deploy(args) -> None:
	metadata_dir = os.path.join(args.source, args.output, args.metadata)
	deployment.deploy(metadata_dir, args.base_uri)

#============================================

def main(argv: list = None) -> int:
	args = parse_args(argv)
	verbosity = 0 if args.quiet else args.verbosity
	logger = utils.setup_logging(utils.level_from_verbosity(verbosity))
	utils.set_quiet_mode(args.quiet)
	try:
		if args.command == 'generate':
			run_generate(args)
		else:
			run_deploy(args)
	except NiftyError as error:
		logger.error(str(error))
		return 1
	return 0


if __name__ == '__main__':
	sys.exit(main())
