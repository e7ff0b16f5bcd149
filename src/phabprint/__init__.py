"""PhabPrint - print Phabricator sprint tasks on a thermal printer."""
